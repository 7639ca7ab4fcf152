"""
Correlator - Stage 2

Pearson correlation matrix over the numeric columns of a table.
"""

import numpy as np
import pandas as pd
from typing import Dict, Any, List, Optional

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import numeric_columns, require_columns, require_variance

logger = get_logger(__name__)


class Correlator:
    """
    Stage 2: Correlator

    Example:
        >>> matrix = Correlator().correlate(df)
        >>> matrix.loc['wt', 'mpg']
        -0.87
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'columns': None,  # None = all numeric columns
            'decimals': 2
        }

        if config:
            self.config.update(config)

        logger.info("Initialized Correlator")

    def correlate(self, df: pd.DataFrame, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """
        Compute the rounded Pearson correlation matrix.

        Raises:
            ValueError: If fewer than 2 numeric columns are available or any
                of them has zero variance
        """
        columns = columns or self.config['columns'] or numeric_columns(df)
        require_columns(df, columns)

        if len(columns) < 2:
            raise ValueError(f"Correlation needs at least 2 numeric columns, got {columns}")

        require_variance(df, columns)

        matrix = df[columns].corr(method='pearson')

        # Symmetric with an exact unit diagonal regardless of float noise
        values = (matrix.values + matrix.values.T) / 2
        np.fill_diagonal(values, 1.0)

        result = pd.DataFrame(values, index=columns, columns=columns).round(self.config['decimals'])

        logger.info(f"Computed {len(columns)}x{len(columns)} correlation matrix")

        return result


def upper_triangle(matrix: pd.DataFrame) -> pd.DataFrame:
    """
    Mask the entries below the diagonal with NaN.

    Example:
        >>> upper_triangle(matrix).loc['wt', 'mpg']
        nan
    """
    mask = np.triu(np.ones(matrix.shape, dtype=bool))
    return matrix.where(mask)
