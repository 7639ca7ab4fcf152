"""
Aggregator - Stage 2

Grouped descriptive statistics: one row per group with the group size and
the rounded mean / standard deviation of the requested columns.
"""

import pandas as pd
from typing import Dict, Any, List, Optional

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import require_columns

logger = get_logger(__name__)

# Output column prefix per aggregation op
OP_PREFIXES = {
    'mean': 'avg',
    'std': 'sd',
}

GROUP_ORDERS = ('first_seen', 'sorted')


class Aggregator:
    """
    Stage 2: Aggregator

    Groups are ordered deterministically: ``first_seen`` keeps the order in
    which group values first appear in the table, ``sorted`` uses the
    category order of a categorical column (natural sort otherwise).

    Example:
        >>> aggregator = Aggregator(config={
        ...     'group_by': 'cyl',
        ...     'columns': {'mpg': ['mean', 'std']}
        ... })
        >>> summary = aggregator.summarize(df)
        >>> summary.columns.tolist()
        ['cyl', 'count', 'avg_mpg', 'sd_mpg']
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'group_by': 'cyl',
            'columns': {
                'mpg': ['mean', 'std'],
                'hp': ['mean', 'std'],
            },
            'group_order': 'first_seen',
            'decimals': 2
        }

        if config:
            self.config.update(config)

        if self.config['group_order'] not in GROUP_ORDERS:
            raise ValueError(
                f"Unknown group order '{self.config['group_order']}', expected one of {GROUP_ORDERS}"
            )

        for col, ops in self.config['columns'].items():
            unknown = [op for op in ops if op not in OP_PREFIXES]
            if unknown:
                raise ValueError(f"Unknown aggregation op(s) {unknown} for column '{col}'")

        logger.info(f"Initialized Aggregator (group by: {self.config['group_by']})")

    def _group_keys(self, series: pd.Series) -> List[Any]:
        present = series.dropna()

        if self.config['group_order'] == 'first_seen':
            return present.drop_duplicates().tolist()

        if isinstance(series.dtype, pd.CategoricalDtype):
            seen = set(present.tolist())
            return [level for level in series.cat.categories if level in seen]

        return sorted(present.unique().tolist())

    def summarize(self, df: pd.DataFrame, group_by: Optional[str] = None) -> pd.DataFrame:
        """
        Compute the grouped summary of ``df``.

        Args:
            df: Table to summarize (not modified)
            group_by: Grouping column, overriding the configured one

        Returns:
            DataFrame with columns [group, count, <prefix>_<column> ...]
        """
        group_col = group_by or self.config['group_by']
        columns = self.config['columns']
        decimals = self.config['decimals']

        require_columns(df, [group_col] + list(columns))

        keys = self._group_keys(df[group_col])
        grouped = df.groupby(group_col, observed=True)

        result = pd.DataFrame({group_col: keys})
        result['count'] = grouped.size().reindex(keys).astype('int64').values

        for col, ops in columns.items():
            for op in ops:
                values = grouped[col].agg(op).reindex(keys)
                result[f"{OP_PREFIXES[op]}_{col}"] = values.round(decimals).values

        logger.info(f"Summarized {len(df)} rows into {len(result)} groups by '{group_col}'")

        return result
