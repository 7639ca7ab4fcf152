"""
File I/O utilities for the mtcars analysis pipeline.
Handles YAML configuration, CSV tables and JSON result files.
"""

import json
import yaml
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Union
from .logging_utils import get_logger

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file has no content)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed

    Example:
        >>> config = load_config("config/pipeline_config.yaml")
        >>> print(config['output']['dir'])
        outputs
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading config from: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def load_csv(file_path: Union[str, Path], **kwargs) -> pd.DataFrame:
    """
    Load CSV file into pandas DataFrame.

    Args:
        file_path: Path to CSV file
        **kwargs: Additional arguments passed to pd.read_csv

    Returns:
        DataFrame containing CSV data

    Example:
        >>> df = load_csv("outputs/mtcars_enhanced.csv")
        >>> print(f"Loaded {len(df)} rows")
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    logger.info(f"Loading CSV: {file_path}")
    df = pd.read_csv(file_path, **kwargs)
    logger.info(f"Loaded {len(df)} rows")

    return df


def save_csv(df: pd.DataFrame, file_path: Union[str, Path], **kwargs) -> Path:
    """
    Save DataFrame to CSV with a header row and no index.

    Parent directories are created; an existing file is overwritten.

    Args:
        df: DataFrame to save
        file_path: Output file path
        **kwargs: Additional arguments passed to df.to_csv

    Returns:
        Path of the written file
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Saving CSV: {file_path}")
    df.to_csv(file_path, index=False, **kwargs)
    logger.info(f"Saved {len(df)} rows to: {file_path}")

    return file_path


def save_json(
    data: Union[Dict, List],
    file_path: Union[str, Path],
    indent: int = 2
) -> Path:
    """
    Save data to JSON file.

    Values json cannot encode natively (numpy scalars, paths) are written
    through ``str``.

    Example:
        >>> save_json({"r_squared": 0.83}, "outputs/analysis_results.json")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Saving JSON: {file_path}")

    with open(file_path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)

    logger.info(f"Saved JSON to: {file_path}")

    return file_path
