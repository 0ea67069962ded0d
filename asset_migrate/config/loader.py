"""
YAML and dict loaders for migration settings.

Usage::

    from asset_migrate.config import load_settings_from_yaml, load_settings_from_dict

    # From YAML
    settings = load_settings_from_yaml("asset-migrate.yaml")

    # From dict
    settings = load_settings_from_dict({
        "target_versions": {"Xenko": "1.7.0-beta02"},
        "workers": 4,
    })
"""

from pathlib import Path
from typing import Union

import yaml

from .settings import MigrationSettings


def load_settings_from_yaml(path: Union[str, Path]) -> MigrationSettings:
    """Load MigrationSettings from a YAML file.

    An empty file yields the default settings.

    Raises:
        FileNotFoundError: If the YAML file does not exist.
        yaml.YAMLError: If the file contains invalid YAML syntax.
        ValueError: If the top level is not a mapping.
        pydantic.ValidationError: If the parsed data fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise yaml.YAMLError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping at top level in {path}, "
            f"got {type(data).__name__}"
        )

    return load_settings_from_dict(data)


def load_settings_from_dict(data: dict) -> MigrationSettings:
    """Load MigrationSettings from a Python dictionary.

    Raises:
        pydantic.ValidationError: If the data fails schema validation.
    """
    return MigrationSettings(**data)
