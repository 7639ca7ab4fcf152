"""
Statistical utilities for the mtcars analysis pipeline.
Provides column type selection, five-number summaries and the input
checks shared by the correlation, modelling and testing stages.
"""

import numpy as np
import pandas as pd
from typing import Dict, Any, List
from .logging_utils import get_logger

logger = get_logger(__name__)


def numeric_columns(df: pd.DataFrame) -> List[str]:
    """
    Names of the numeric columns of a table, in table order.

    Categorical (recoded) columns are excluded even though their
    categories may look numeric.

    Example:
        >>> numeric_columns(pd.DataFrame({'a': [1, 2], 'b': ['x', 'y']}))
        ['a']
    """
    return df.select_dtypes(include=[np.number]).columns.tolist()


def calculate_basic_stats(series: pd.Series) -> Dict[str, Any]:
    """
    Calculate summary statistics for a column.

    Numeric columns get the six-number summary (min, quartiles, mean, max);
    categorical and text columns get per-level counts.

    Args:
        series: Pandas Series to analyze

    Returns:
        Dictionary of statistics

    Example:
        >>> stats = calculate_basic_stats(pd.Series([10, 20, 30, 40, 50]))
        >>> print(stats['Mean'])
        30.0
    """
    if pd.api.types.is_numeric_dtype(series):
        return {
            'Min.': float(series.min()),
            '1st Qu.': float(series.quantile(0.25)),
            'Median': float(series.median()),
            'Mean': float(series.mean()),
            '3rd Qu.': float(series.quantile(0.75)),
            'Max.': float(series.max()),
        }

    counts = series.value_counts(sort=False)
    return {str(level): int(count) for level, count in counts.items()}


def require_columns(df: pd.DataFrame, columns: List[str]) -> None:
    """Raise ValueError naming any of ``columns`` missing from ``df``."""
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(
            f"Column(s) {missing} not found; available columns: {list(df.columns)}"
        )


def require_distinct(series: pd.Series, minimum: int = 2) -> None:
    """
    Raise ValueError if ``series`` has fewer than ``minimum`` distinct values.
    """
    distinct = series.dropna().nunique()
    if distinct < minimum:
        raise ValueError(
            f"Column '{series.name}' needs at least {minimum} distinct values, found {distinct}"
        )


def require_variance(df: pd.DataFrame, columns: List[str]) -> None:
    """
    Raise ValueError if any of ``columns`` is constant.

    Correlation and regression are undefined for a zero-variance column.
    """
    constant = [col for col in columns if df[col].nunique(dropna=True) < 2]
    if constant:
        raise ValueError(f"Zero-variance column(s): {constant}")
