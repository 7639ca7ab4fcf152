"""
Utility modules for the mtcars analysis pipeline.
Provides common functionality for logging, file I/O, and statistics.
"""

from .logging_utils import setup_logger, get_logger, configure_logging
from .file_utils import load_config, load_csv, save_csv, save_json
from .stats_utils import (
    numeric_columns,
    calculate_basic_stats,
    require_columns,
    require_distinct,
    require_variance,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'configure_logging',
    'load_config',
    'load_csv',
    'save_csv',
    'save_json',
    'numeric_columns',
    'calculate_basic_stats',
    'require_columns',
    'require_distinct',
    'require_variance',
]
