#!/usr/bin/env python3
# pbl/core/config.py

"""
Dispatcher Configuration Manager
Handles loading, validation, and access to the pbl configuration file
"""

import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "PBL_CONFIG"
DEFAULT_CONFIG_PATH = "/etc/pbl/pbl.yml"

BACKEND_ROOT = "/usr/lib/bootloader"
LOG_FILE = "/var/log/pbl.log"
SYSCONFIG_BOOTLOADER = "/etc/sysconfig/bootloader"
SYSCONFIG_LANGUAGE = "/etc/sysconfig/language"


class ConfigError(Exception):
    """Raised when pbl.yml exists but cannot be used."""


class PblConfig:
    """
    Manages the dispatcher configuration loaded from `pbl.yml`.

    The file is optional. Every key has a built-in default matching the
    standard filesystem layout, so a system without the file behaves as if
    it contained:

        backend_root: /usr/lib/bootloader
        log_file: /var/log/pbl.log
        settings_sources:
          bootloader: /etc/sysconfig/bootloader
          language: /etc/sysconfig/language
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """
        Load and validate the configuration from the given path.

        Args:
            config_path: Path to the YAML configuration file. Defaults to
                         `$PBL_CONFIG`, or `/etc/pbl/pbl.yml` when unset.

        Raises:
            ConfigError: If the file exists but is not valid YAML, is not a
                         mapping, or holds a non-string path value.
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH
        self.config_path: Path = Path(config_path)
        self.data: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Merge the configuration file (if any) over the defaults.

        Returns:
            The effective configuration dictionary.
        """
        config = self._default_config()

        if not self.config_path.exists():
            logger.debug(f"No configuration file at {self.config_path}, using defaults.")
            return config

        try:
            with self.config_path.open('r') as f:
                loaded: Optional[Any] = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML file {self.config_path}: {e}")
        except IOError as e:
            raise ConfigError(f"I/O error accessing configuration file {self.config_path}: {e}")

        # An empty file is the same as no file
        if loaded is None:
            return config

        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration file {self.config_path} must contain a mapping.")

        for key in ('backend_root', 'log_file'):
            if key in loaded:
                config[key] = self._checked_path(key, loaded[key])

        sources = loaded.get('settings_sources', {})
        if not isinstance(sources, dict):
            raise ConfigError(f"'settings_sources' in {self.config_path} must be a mapping.")
        for name in ('bootloader', 'language'):
            if name in sources:
                config['settings_sources'][name] = self._checked_path(
                    f"settings_sources.{name}", sources[name]
                )

        logger.debug(f"Configuration loaded from {self.config_path}.")
        return config

    def _checked_path(self, key: str, value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Invalid value for '{key}' in {self.config_path}: {value!r}")
        return value

    @staticmethod
    def _default_config() -> Dict[str, Any]:
        return {
            'backend_root': BACKEND_ROOT,
            'log_file': LOG_FILE,
            'settings_sources': {
                'bootloader': SYSCONFIG_BOOTLOADER,
                'language': SYSCONFIG_LANGUAGE,
            },
        }

    def set(self, key: str, value: Any) -> None:
        """Override a configuration value in memory (e.g. from `--log`)."""
        self.data[key] = value
        logger.debug(f"Configuration key '{key}' set to: {value}")

    @property
    def backend_root(self) -> Path:
        return Path(self.data['backend_root'])

    @property
    def log_file(self) -> str:
        return self.data['log_file']

    @property
    def bootloader_settings(self) -> Path:
        return Path(self.data['settings_sources']['bootloader'])

    @property
    def language_settings(self) -> Path:
        return Path(self.data['settings_sources']['language'])
