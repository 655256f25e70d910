import logging
from pathlib import Path
from typing import Dict, Any, Tuple

from bookstore.utils import load_settings, deep_merge_dicts


DEFAULTS: Dict[str, Any] = {
    'database': 'mongodb',
    'db_uri': 'mongodb://localhost:27017',
    'db_name': 'plp_bookstore',
    'collection': 'books',
    'server_selection_timeout_ms': 5000,
    'log_level': 'info',
}


class Config:
    """Static configuration class - no instances, only class methods"""
    _config: Dict[str, Any] = dict(DEFAULTS)

    @classmethod
    def initialize(cls, config_file: str) -> Dict[str, Any]:
        """Initialize the config with values from config file"""
        cls._config = cls._load_system_config(config_file)
        return cls._config

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a configuration value by key"""
        return cls._config.get(key, default)

    @classmethod
    def get_db_params(cls) -> Tuple[str, str, str, str]:
        """Get database parameters from config data"""
        return (
            cls._config.get('database', DEFAULTS['database']),
            cls._config.get('db_uri', DEFAULTS['db_uri']),
            cls._config.get('db_name', DEFAULTS['db_name']),
            cls._config.get('collection', DEFAULTS['collection'])
        )

    @classmethod
    def log_level(cls) -> int:
        """Map the configured level name onto a logging constant"""
        name = str(cls._config.get('log_level', 'info')).upper()
        return getattr(logging, name, logging.INFO)

    @classmethod
    def _load_system_config(cls, config_file: str) -> Dict[str, Any]:
        """
        Load and return the configuration from config.json merged over the defaults.
        If the file is not found, return default configuration values.
        """
        config = dict(DEFAULTS)
        if config_file:
            config_path = Path(config_file)
            if config_path.exists():
                deep_merge_dicts(config, load_settings(config_path))
                return config
        logging.warning(f'Configuration file "{config_file}" not found. Using defaults.')
        return config
