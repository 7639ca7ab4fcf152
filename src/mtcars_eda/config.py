"""
Configuration Management

Loads and manages pipeline configuration from YAML files and environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dotenv import load_dotenv

from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_FILE = PROJECT_ROOT / 'config' / 'pipeline_config.yaml'

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    'MTCARS_OUTPUT_DIR': 'output.dir',
    'MTCARS_DATA_PATH': 'loader.path',
    'LOG_LEVEL': 'logging.level',
}


class Config:
    """
    Pipeline configuration manager.

    Loads configuration from:
    1. YAML file (config/pipeline_config.yaml)
    2. Environment variables (.env)
    3. Command-line overrides (via ``set``)

    Example:
        >>> config = Config()
        >>> print(config.get('output.dir'))
        outputs
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        env_path = PROJECT_ROOT / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE

        self.config = {}
        if Path(config_file).exists():
            self.config = load_yaml_config(config_file)
            logger.info(f"Loaded config from: {config_file}")
        else:
            logger.warning(f"Config file not found: {config_file} - using defaults")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        for env_var, key in ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value:
                self.set(key, value)
                logger.debug(f"  {key} overridden by {env_var}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'output.dir')
            default: Default value if key not found

        Example:
            >>> config.get('aggregator.group_by')
            'cyl'
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'output.dir')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """
        Get configuration for a specific stage.

        Args:
            stage: Section name ('loader', 'recoder', 'aggregator', ...)

        Returns:
            Stage configuration dictionary (empty if the section is absent)
        """
        return self.config.get(stage) or {}

    def get_verification_config(self, verification: str) -> Dict[str, Any]:
        """
        Get configuration for a specific verification.

        Args:
            verification: Verification name ('v2', 'v4')
        """
        return (self.config.get('verification') or {}).get(verification) or {}

    def to_dict(self) -> Dict[str, Any]:
        return self.config.copy()


_global_config = None


def get_config(config_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Get or create the global configuration instance.

    Args:
        config_file: Path to config file (only used on first call)
    """
    global _global_config

    if _global_config is None:
        _global_config = Config(config_file)

    return _global_config


def reset_config() -> None:
    """Drop the cached global configuration."""
    global _global_config
    _global_config = None
