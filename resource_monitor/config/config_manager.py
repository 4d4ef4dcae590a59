"""
Configuration Manager module for the Resource Monitor.
"""
import copy
import json
import math
import os
from typing import Any, Optional, Dict
from ..utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "config_version": 1,
    "monitor": {
        "interval_sec": 2.0,
        "placeholder": "...",
    },
    "logging": {
        "console_level": "WARNING",
        "file_level": "DEBUG",
        "file_path": None,
        "max_bytes": 10 * 1024 * 1024,
        "backup_count": 5,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges ``override`` on top of a copy of ``base``.

    :param base: Dictionary supplying default values
    :type base: Dict[str, Any]
    :param override: Dictionary whose values take precedence
    :type override: Dict[str, Any]
    :return: New merged dictionary
    :rtype: Dict[str, Any]
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigManager:
    """
    Loads and manages monitor configuration from a file.

    Values missing from the file fall back to :data:`DEFAULT_CONFIG`.
    """
    CURRENT_CONFIG_VERSION = 1

    def __init__(self, config_path: Optional[str] = None):
        """
        Initializes the ConfigManager, loading the configuration file if one is given.

        :param config_path: The path to the monitor configuration JSON file
        :type config_path: Optional[str]
        :raises: FileNotFoundError if the configuration file path is provided but does not exist
        :raises: ValueError if the configuration file is invalid JSON or contains invalid values
        """
        self._config_path = config_path
        self._config_data: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if self._config_path is None:
            logger.debug("ConfigManager initialized without a config path, using defaults.")
        else:
            self._config_data = _deep_merge(DEFAULT_CONFIG, self._load_config())
            self._check_config_version()
            logger.info(f"Configuration loaded successfully from: {self._config_path}")
        self._validate_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Loads the configuration data from the JSON file.

        :return: Parsed configuration object
        :rtype: Dict[str, Any]
        :raises: FileNotFoundError if the file doesn't exist
        :raises: ValueError if there are JSON parsing errors
        """
        if not os.path.exists(self._config_path):
            logger.critical(f"Configuration file not found: {self._config_path}")
            raise FileNotFoundError(f"Configuration file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.critical(f"Error decoding JSON from config file {self._config_path}: {e}")
            raise ValueError(f"Invalid JSON in configuration file: {e}") from e
        except (IOError, OSError) as e:
            logger.critical(f"Error reading config file {self._config_path}: {e}")
            raise ValueError(f"Could not read configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("Configuration file content is not a valid JSON object.")
        return data

    def _check_config_version(self):
        """
        Warns when the file was written for a newer configuration layout.
        """
        loaded_version = self.get('config_version', 0)
        if not isinstance(loaded_version, int) or loaded_version <= 0:
            logger.warning(f"Invalid 'config_version' ({loaded_version}) found. Assuming v{self.CURRENT_CONFIG_VERSION}.")
        elif loaded_version > self.CURRENT_CONFIG_VERSION:
            logger.warning(f"Configuration file version (v{loaded_version}) is newer than the supported version (v{self.CURRENT_CONFIG_VERSION}). Some settings may be ignored.")
        else:
            logger.debug(f"Configuration version (v{loaded_version}) matches the expected version.")

    def _validate_config(self):
        """
        Validates the configuration values the monitor depends on.

        :raises: ValueError if a value is missing or has the wrong type
        """
        interval = self.get('monitor.interval_sec')
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or not math.isfinite(interval) or interval <= 0:
            msg = f"Invalid 'monitor.interval_sec' configuration: Must be a finite positive number, got {interval!r}."
            logger.critical(msg)
            raise ValueError(msg)

        placeholder = self.get('monitor.placeholder')
        if not isinstance(placeholder, str):
            msg = f"Invalid 'monitor.placeholder' configuration: Must be a string, got {placeholder!r}."
            logger.critical(msg)
            raise ValueError(msg)

        for key in ('logging.console_level', 'logging.file_level'):
            if not isinstance(self.get(key), str):
                msg = f"Invalid '{key}' configuration: Must be a level name string."
                logger.critical(msg)
                raise ValueError(msg)

        file_path = self.get('logging.file_path')
        if file_path is not None and not isinstance(file_path, str):
            msg = "Invalid 'logging.file_path' configuration: Must be null or a string."
            logger.critical(msg)
            raise ValueError(msg)

        for key in ('logging.max_bytes', 'logging.backup_count'):
            value = self.get(key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                msg = f"Invalid '{key}' configuration: Must be a non-negative integer."
                logger.critical(msg)
                raise ValueError(msg)

        logger.debug("Configuration validation passed.")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using a dot-separated key path.

        :param key_path: The dot-separated path to the configuration key
        :type key_path: str
        :param default: The default value to return if the key is not found
        :type default: Any
        :return: The configuration value or the default value
        :rtype: Any
        """
        value: Any = self._config_data
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                logger.debug(f"Key path '{key_path}' leads to non-dictionary element at '{key}'.")
                return default
            if key not in value:
                logger.debug(f"Configuration key not found: '{key_path}'. Returning default: {default}")
                return default
            value = value[key]
        return value

    @property
    def config_path(self) -> Optional[str]:
        return self._config_path

    @property
    def all_config(self) -> Dict[str, Any]:
        """
        Returns a copy of the entire loaded configuration dictionary.

        :return: Copy of configuration dictionary
        :rtype: Dict[str, Any]
        """
        return copy.deepcopy(self._config_data)
