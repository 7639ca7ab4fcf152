"""
Loader - Stage 1

Supplies the mtcars table and its descriptive summary:
- Builds the fixed in-memory dataset (or reads a CSV with the same columns)
- Per-column six-number summary for numeric columns
- Structure overview (type and leading values of every column)
"""

import pandas as pd
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from ..utils.logging_utils import get_logger
from ..utils.file_utils import load_csv
from ..utils.stats_utils import calculate_basic_stats
from .dataset import COLUMNS, INTEGER_COLUMNS, MTCARS

logger = get_logger(__name__)


def load_dataset(path: Optional[Union[str, Path]] = None, index_col: str = 'model') -> pd.DataFrame:
    """
    Load the mtcars table.

    Args:
        path: Optional CSV to read instead of the built-in dataset. If the
            file has an ``index_col`` column it becomes the row index.
        index_col: Name given to the car-model row index

    Returns:
        DataFrame with one row per car, indexed by car model

    Example:
        >>> df = load_dataset()
        >>> df.shape
        (32, 11)
    """
    if path is not None:
        df = load_csv(path)
        if index_col in df.columns:
            df = df.set_index(index_col)
        return df

    df = pd.DataFrame(
        [row[1:] for row in MTCARS],
        columns=COLUMNS,
        index=pd.Index([row[0] for row in MTCARS], name=index_col)
    )
    df[INTEGER_COLUMNS] = df[INTEGER_COLUMNS].astype('int64')

    logger.info(f"Loaded built-in dataset: {len(df)} rows, {len(df.columns)} columns")

    return df


class Loader:
    """
    Stage 1: Loader

    Attributes:
        config: Configuration dict with ``path`` (optional CSV) and
            ``index_col`` (row index name)

    Example:
        >>> loader = Loader()
        >>> df = loader.load()
        >>> summary, structure = loader.describe(df)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'path': None,
            'index_col': 'model',
            'structure_preview': 10
        }

        if config:
            self.config.update(config)

        logger.info("Initialized Loader")
        if self.config['path']:
            logger.info(f"  Data path: {self.config['path']}")

    def load(self) -> pd.DataFrame:
        """Load the configured table."""
        return load_dataset(self.config['path'], index_col=self.config['index_col'])

    def describe(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """
        Summarize every column of ``df``.

        Returns:
            Tuple of (summary, structure)
            - summary: one column per numeric table column, rows Min. to Max.
            - structure: one row per column with its dtype and first values
        """
        summary = pd.DataFrame({
            col: calculate_basic_stats(df[col])
            for col in df.select_dtypes(include='number').columns
        })

        preview = self.config['structure_preview']
        structure = pd.DataFrame({
            'column': df.columns,
            'dtype': [str(dtype) for dtype in df.dtypes],
            'values': [
                ' '.join(str(v) for v in df[col].head(preview).tolist()) + ' ...'
                for col in df.columns
            ]
        })

        return summary, structure
