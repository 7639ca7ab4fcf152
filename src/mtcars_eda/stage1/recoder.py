"""
Recoder - Stage 1

Turns numeric code columns into labelled categorical columns.

The transform is pure: ``Recoder.apply`` returns a new table and never
mutates the table it was given.
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Optional

import pandas as pd

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import require_columns

logger = get_logger(__name__)


@dataclass
class RecodeRule:
    """
    Mapping of one numeric column to an ordered label list.

    If ``codes`` is given, ``codes[i]`` maps to ``labels[i]``. Otherwise codes
    are positions into ``labels`` counted from ``base`` (0 or 1).

    Example:
        >>> RecodeRule('am', ['Automatic', 'Manual'])            # 0, 1
        >>> RecodeRule('cyl', ['4', '6', '8'], codes=[4, 6, 8])
    """
    column: str
    labels: List[str]
    codes: Optional[List[float]] = None
    base: int = 0

    def __post_init__(self):
        self.labels = [str(label) for label in self.labels]

        if len(set(self.labels)) != len(self.labels):
            raise ValueError(f"Duplicate labels for column '{self.column}': {self.labels}")

        if self.codes is not None and len(self.codes) != len(self.labels):
            raise ValueError(
                f"Column '{self.column}': {len(self.codes)} codes for {len(self.labels)} labels"
            )

        if self.base not in (0, 1):
            raise ValueError(f"Column '{self.column}': base must be 0 or 1, got {self.base}")

    @property
    def mapping(self) -> Dict[Any, str]:
        if self.codes is not None:
            return dict(zip(self.codes, self.labels))
        return {self.base + i: label for i, label in enumerate(self.labels)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecodeRule':
        return cls(
            column=data['column'],
            labels=list(data['labels']),
            codes=list(data['codes']) if data.get('codes') is not None else None,
            base=int(data.get('base', 0))
        )


DEFAULT_RULES = [
    RecodeRule('cyl', ['4', '6', '8'], codes=[4, 6, 8]),
    RecodeRule('vs', ['V-shaped', 'Straight']),
    RecodeRule('am', ['Automatic', 'Manual']),
    RecodeRule('gear', ['3', '4', '5'], codes=[3, 4, 5]),
    RecodeRule('carb', ['1', '2', '3', '4', '6', '8'], codes=[1, 2, 3, 4, 6, 8]),
]


def recode_column(series: pd.Series, rule: RecodeRule) -> pd.Series:
    """
    Map a numeric code column to a categorical column of labels.

    Raises:
        ValueError: If any non-null code has no label
    """
    mapped = series.map(rule.mapping)

    unmapped = mapped.isna() & series.notna()
    if unmapped.any():
        bad_codes = sorted(series[unmapped].unique().tolist())
        raise ValueError(
            f"Column '{rule.column}': code(s) {bad_codes} outside configured labels {rule.labels}"
        )

    return pd.Series(
        pd.Categorical(mapped, categories=rule.labels),
        index=series.index,
        name=series.name
    )


class Recoder:
    """
    Stage 1: Recoder

    Example:
        >>> recoder = Recoder()
        >>> recoded = recoder.apply(df)
        >>> recoded['am'].cat.categories.tolist()
        ['Automatic', 'Manual']
    """

    def __init__(self, rules: Optional[List[RecodeRule]] = None):
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        logger.info(f"Initialized Recoder ({len(self.rules)} rules)")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'Recoder':
        """Build a Recoder from the ``recoder`` config section."""
        rules = (config or {}).get('rules')
        if rules is None:
            return cls()
        return cls([RecodeRule.from_dict(rule) for rule in rules])

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Return a copy of ``df`` with every configured column recoded.

        Raises:
            ValueError: If a configured column is missing or holds an
                unmapped code
        """
        require_columns(df, [rule.column for rule in self.rules])

        recoded = df.copy()
        for rule in self.rules:
            recoded[rule.column] = recode_column(df[rule.column], rule)
            logger.debug(f"  Recoded {rule.column} -> {rule.labels}")

        logger.info(f"Recoded {len(self.rules)} columns to categorical")

        return recoded
