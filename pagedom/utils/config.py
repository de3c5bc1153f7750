"""
Configuration for pagedom applications.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "parser": {
        "backend": "html5lib",
        "features": "html5lib"
    },
    "output": {
        "mode": "inner",
        "remove_tags": ["script", "style"]
    },
    "logging": {
        "console_level": "WARNING",
        "file": None
    }
}


def get_default_config_path() -> str:
    return os.path.join(os.path.expanduser("~"), ".pagedom", "config.json")


class Config:
    """JSON-backed configuration with dotted key access."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Nothing is written to disk until ``save`` is called.

        Args:
            config_path: Path to the config file, defaults to ~/.pagedom/config.json
        """
        self.config_path = config_path or get_default_config_path()
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {self.config_path})")

    def load(self) -> None:
        """Load configuration from file, falling back to defaults."""
        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            self._set_defaults()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration from {self.config_path}: {e}")
            self._set_defaults()
            return

        if not isinstance(loaded, dict):
            logger.error(f"Configuration in {self.config_path} is not an object, using defaults")
            self._set_defaults()
            return

        self._set_defaults()
        with self._lock:
            _merge(self.config, loaded)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self) -> None:
        """
        Save configuration to file.

        Raises:
            OSError: If the file cannot be written
        """
        with self._lock:
            config_copy = copy.deepcopy(self.config)

        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key, nested keys separated by dots (e.g. 'parser.backend')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    return default
                config = config[part]
            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key, nested keys separated by dots
            value: Configuration value
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]
            config[parts[-1]] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Configuration key

        Returns:
            bool: True if key was removed
        """
        with self._lock:
            config = self.config
            parts = key.split('.')
            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    return False
                config = config[part]
            if parts[-1] in config:
                del config[parts[-1]]
                return True
            return False

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self.config)

    def _set_defaults(self) -> None:
        with self._lock:
            self.config = copy.deepcopy(DEFAULT_CONFIG)


def _merge(target: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value
