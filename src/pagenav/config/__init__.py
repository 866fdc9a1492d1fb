"""
Tile strip configuration.

The strip reads its seed tiles, new-tile defaults and fallback page text
from configs/page_nav.yaml. Everything here is read once at startup; a
missing file means built-in defaults, a broken one is an error.
"""

from pathlib import Path

import yaml


class ConfigError(Exception):
    """page_nav.yaml could not be read."""


class ConfigValidationError(ConfigError):
    """page_nav.yaml parsed but its contents are not a usable strip config."""


class ConfigNotFoundError(ConfigError):
    """No config file at the requested path."""


def get_config_root() -> Path:
    """Directory holding page_nav.yaml, relative to the working directory."""
    return Path("configs")


def load_yaml(path: Path) -> dict:
    """
    Read a strip config file into a plain mapping.

    An empty file reads as {} so every key falls back to its default.

    Raises:
        ConfigNotFoundError: path does not exist.
        ConfigValidationError: the text is not YAML, or not a mapping at the top.
        ConfigError: the file exists but cannot be read.
    """
    if not path.exists():
        raise ConfigNotFoundError(f"Tile strip config not found: {path}")

    try:
        data = yaml.safe_load(path.read_bytes())
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Tile strip config {path} is not valid YAML: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read tile strip config {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Tile strip config {path} must be a mapping of settings")
    return data


def __getattr__(name):
    if name == 'load_page_nav_config':
        from .page_nav import load_page_nav_config
        return load_page_nav_config
    elif name == 'PageNavConfig':
        from .page_nav import PageNavConfig
        return PageNavConfig
    else:
        raise AttributeError(f"module 'pagenav.config' has no attribute '{name}'")


__all__ = [
    'ConfigError', 'ConfigValidationError', 'ConfigNotFoundError',
    'get_config_root', 'load_yaml',
    'load_page_nav_config', 'PageNavConfig',
]
