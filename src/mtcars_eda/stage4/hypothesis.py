"""
Hypothesis Tests - Stage 4

Two classical tests, each returning a read-only HypothesisTestResult:
- Welch two-sample t-test of a numeric column between the two levels of a
  grouping column
- Pearson correlation test between two numeric columns
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import require_columns, require_distinct

logger = get_logger(__name__)


@dataclass(frozen=True)
class HypothesisTestResult:
    """Outcome of one two-sided hypothesis test."""
    test: str
    data: str
    statistic: float
    df: Optional[float]
    p_value: float
    conf_int: Optional[Tuple[float, float]] = None
    conf_level: float = 0.95
    estimates: Dict[str, float] = field(default_factory=dict)
    alternative: str = ''

    def summary(self) -> str:
        """Human-readable test report."""
        df_text = f", df = {self.df:.4g}" if self.df is not None else ''
        lines = [
            f"\t{self.test}",
            "",
            f"data:  {self.data}",
            f"t = {self.statistic:.4f}{df_text}, p-value = {self.p_value:.4g}",
            f"alternative hypothesis: {self.alternative}",
        ]
        if self.conf_int is not None:
            lines += [
                f"{self.conf_level:.0%} confidence interval:",
                f" {self.conf_int[0]:.7g} {self.conf_int[1]:.7g}",
            ]
        lines.append("sample estimates:")
        lines += [f"{name}: {value:.7g}" for name, value in self.estimates.items()]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'test': self.test,
            'data': self.data,
            'statistic': self.statistic,
            'df': self.df,
            'p_value': self.p_value,
            'conf_int': list(self.conf_int) if self.conf_int is not None else None,
            'estimates': dict(self.estimates),
        }


def _group_levels(series: pd.Series) -> List[Any]:
    """Levels present in ``series``, in category order when categorical."""
    present = series.dropna()
    if isinstance(series.dtype, pd.CategoricalDtype):
        seen = set(present.tolist())
        return [level for level in series.cat.categories if level in seen]
    return present.drop_duplicates().tolist()


def welch_t_test(
    df: pd.DataFrame,
    value: str,
    group: str,
    conf_level: float = 0.95
) -> HypothesisTestResult:
    """
    Welch (unequal variance) two-sample t-test of ``value`` by ``group``.

    The difference is taken as first level minus second level.

    Raises:
        ValueError: If ``group`` does not have exactly two levels, a group has
            fewer than 2 observations, or ``value`` has fewer than 2 distinct
            values

    Example:
        >>> result = welch_t_test(df, 'mpg', 'am')
        >>> round(result.statistic, 3)
        -3.767
    """
    require_columns(df, [value, group])
    require_distinct(df[value])

    levels = _group_levels(df[group])
    if len(levels) != 2:
        raise ValueError(
            f"Column '{group}' must have exactly 2 levels for a two-sample test, found {levels}"
        )

    samples = [df.loc[df[group] == level, value].dropna().astype(float) for level in levels]
    for level, sample in zip(levels, samples):
        if len(sample) < 2:
            raise ValueError(f"Group '{level}' of '{group}' has {len(sample)} observation(s), need 2")

    a, b = samples
    result = stats.ttest_ind(a, b, equal_var=False)

    # Welch-Satterthwaite degrees of freedom
    va = a.var(ddof=1) / len(a)
    vb = b.var(ddof=1) / len(b)
    dof = (va + vb) ** 2 / (va ** 2 / (len(a) - 1) + vb ** 2 / (len(b) - 1))

    diff = a.mean() - b.mean()
    margin = stats.t.ppf((1 + conf_level) / 2, dof) * np.sqrt(va + vb)

    test_result = HypothesisTestResult(
        test="Welch Two Sample t-test",
        data=f"{value} by {group}",
        statistic=float(result.statistic),
        df=float(dof),
        p_value=float(result.pvalue),
        conf_int=(float(diff - margin), float(diff + margin)),
        conf_level=conf_level,
        estimates={
            f"mean in group {levels[0]}": float(a.mean()),
            f"mean in group {levels[1]}": float(b.mean()),
        },
        alternative=f"true difference in means between group {levels[0]} "
                    f"and group {levels[1]} is not equal to 0",
    )

    logger.info(f"Welch t-test {value} by {group}: t = {test_result.statistic:.4f}, "
                f"p = {test_result.p_value:.4g}")

    return test_result


def correlation_test(
    df: pd.DataFrame,
    x: str,
    y: str,
    conf_level: float = 0.95
) -> HypothesisTestResult:
    """
    Pearson correlation test between ``x`` and ``y``.

    t = r * sqrt((n - 2) / (1 - r²)) on n - 2 degrees of freedom. The
    confidence interval uses the Fisher z transform and needs n > 3.

    Raises:
        ValueError: If either column has fewer than 2 distinct values or
            there are fewer than 3 complete pairs

    Example:
        >>> result = correlation_test(df, 'wt', 'mpg')
        >>> round(result.estimates['cor'], 4)
        -0.8677
    """
    require_columns(df, [x, y])
    pairs = df[[x, y]].dropna().astype(float)
    require_distinct(pairs[x])
    require_distinct(pairs[y])

    n = len(pairs)
    if n < 3:
        raise ValueError(f"Correlation test needs at least 3 complete pairs, got {n}")

    r, p_value = stats.pearsonr(pairs[x], pairs[y])
    r = float(r)
    dof = n - 2

    with np.errstate(divide='ignore'):
        t_stat = r * np.sqrt(dof / (1 - r ** 2)) if abs(r) < 1 else np.copysign(np.inf, r)

    conf_int = None
    if n > 3:
        z = np.arctanh(np.clip(r, -1 + 1e-15, 1 - 1e-15))
        margin = stats.norm.ppf((1 + conf_level) / 2) / np.sqrt(n - 3)
        conf_int = (float(np.tanh(z - margin)), float(np.tanh(z + margin)))

    test_result = HypothesisTestResult(
        test="Pearson's product-moment correlation",
        data=f"{x} and {y}",
        statistic=float(t_stat),
        df=float(dof),
        p_value=float(np.clip(p_value, 0.0, 1.0)),
        conf_int=conf_int,
        conf_level=conf_level,
        estimates={'cor': r},
        alternative="true correlation is not equal to 0",
    )

    logger.info(f"Correlation test {x} vs {y}: r = {r:.4f}, p = {test_result.p_value:.4g}")

    return test_result


class HypothesisTester:
    """
    Stage 4: Hypothesis Tester

    Example:
        >>> tester = HypothesisTester()
        >>> results = tester.run(df)
        >>> results['t_test'].p_value < 0.01
        True
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            't_test': {'value': 'mpg', 'group': 'am'},
            'correlation_test': {'x': 'wt', 'y': 'mpg'},
            'conf_level': 0.95
        }

        if config:
            for key, value in config.items():
                if isinstance(value, dict) and key in self.config:
                    self.config[key].update(value)
                else:
                    self.config[key] = value

        logger.info("Initialized Hypothesis Tester")

    def run(self, df: pd.DataFrame) -> Dict[str, HypothesisTestResult]:
        """Run both configured tests on ``df``."""
        t_config = self.config['t_test']
        cor_config = self.config['correlation_test']
        conf_level = self.config['conf_level']

        return {
            't_test': welch_t_test(df, t_config['value'], t_config['group'], conf_level),
            'correlation_test': correlation_test(df, cor_config['x'], cor_config['y'], conf_level),
        }
