"""
Exporter - Stage 4

Writes the augmented table to a delimited text file with a header row.
Categorical columns are written as their label text.
"""

from pathlib import Path
from typing import Dict, Any, Optional, Union

import pandas as pd

from ..utils.logging_utils import get_logger
from ..utils.file_utils import save_csv

logger = get_logger(__name__)


class Exporter:
    """
    Stage 4: Exporter

    Example:
        >>> exporter = Exporter(output_dir="outputs")
        >>> exporter.export(df)
        PosixPath('outputs/mtcars_enhanced.csv')
    """

    def __init__(
        self,
        output_dir: Union[str, Path] = "outputs",
        config: Optional[Dict[str, Any]] = None
    ):
        self.output_dir = Path(output_dir)

        self.config = {
            'filename': 'mtcars_enhanced.csv',
            'delimiter': ','
        }

        if config:
            self.config.update(config)

        logger.info(f"Initialized Exporter (output: {self.output_dir})")

    def export(self, df: pd.DataFrame, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write every column of ``df`` (the row index is not written).

        Rerunning overwrites the previous file.

        Raises:
            OSError: If the file cannot be written
        """
        path = Path(path) if path is not None else self.output_dir / self.config['filename']
        return save_csv(df, path, sep=self.config['delimiter'])
