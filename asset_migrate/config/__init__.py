"""
Config Module

Settings schema and its YAML/dict loaders.
"""

from .loader import load_settings_from_dict, load_settings_from_yaml
from .settings import MigrationSettings

__all__ = [
    "MigrationSettings",
    "load_settings_from_yaml",
    "load_settings_from_dict",
]
