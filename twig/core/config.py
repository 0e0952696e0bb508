"""Configuration management for Twig.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import Optional, Dict, Tuple
from .errors import InvalidStateError

# Defaults for the keys Twig reads itself
DEFAULTS = {
    ('init', 'defaultbranch'): 'master',
    ('core', 'abbrev'): '7',
    ('core', 'autocompact'): 'true',
}

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def split_key(key: str) -> Tuple[str, str]:
    """
    Split a dotted key into section and option.

    A key without a dot belongs to the core section.
    """
    section, option = key.split('.', 1) if '.' in key else ('core', key)
    if not section or not option:
        raise InvalidStateError(f"Invalid config key: '{key}'")
    return section.lower(), option.lower()


class Config:
    """
    Manages Twig configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.twigconfig
    - Repository config: .twig/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.twigconfig'

    def __init__(self, repo_config_path: Optional[Path] = None,
                 global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = repo_config_path
        self.global_config_path = global_config_path or self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None

    @staticmethod
    def _load(path: Optional[Path]) -> configparser.ConfigParser:
        config = configparser.ConfigParser()
        if path and path.exists():
            config.read(path)
        return config

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._load(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._load(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (TWIG_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value, then the built-in default

        Args:
            section: Config section (e.g., 'core', 'init')
            key: Config key (e.g., 'abbrev')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"TWIG_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback
        return DEFAULTS.get((section, key))

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        value = self.get(section, key)
        if value is None:
            return fallback
        value = value.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise InvalidStateError(f"Config {section}.{key} is not a boolean: '{value}'")

    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value)
        except ValueError:
            raise InvalidStateError(f"Config {section}.{key} is not an integer: '{value}'")

    def _target(self, global_config: bool):
        if global_config:
            return self.global_config, self.global_config_path
        if not self.repo_config_path:
            raise InvalidStateError("No repository config path available")
        return self.repo_config, self.repo_config_path

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        config, config_path = self._target(global_config)

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        config, config_path = self._target(global_config)

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)

        if not config.options(section):
            config.remove_section(section)

        with open(config_path, 'w') as f:
            config.write(f)

        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        List all configuration values.

        Args:
            global_only: Only show global config
            repo_only: Only show repo config

        Returns:
            Dict of sections to key-value dicts, repo values overriding global
        """
        result: Dict[str, Dict[str, str]] = {}

        if not repo_only:
            for section in self.global_config.sections():
                for key, value in self.global_config.items(section):
                    result.setdefault(section, {})[key] = value

        if not global_only and self.repo_config:
            for section in self.repo_config.sections():
                for key, value in self.repo_config.items(section):
                    result.setdefault(section, {})[key] = value

        return result


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
