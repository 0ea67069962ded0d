"""Shared fixtures for the migration test suite.

Provides a frozen registry holding the built-in sprite font upgraders, a
runner bound to it, and factories for contexts and legacy documents.
"""

import pytest

from asset_migrate.assets.sprite_font import register_sprite_font
from asset_migrate.document import wrap
from asset_migrate.migration import MigrationContext, MigrationRunner, UpgraderRegistry
from asset_migrate.versioning import FormatVersion

#: Current sprite font format version.
TARGET = FormatVersion.parse("1.7.0-beta02")


def _make_context(**kwargs) -> MigrationContext:
    """Build a ``MigrationContext`` with sensible defaults.

    All fields can be overridden via keyword arguments.
    """
    defaults: dict = {
        "schema_name": "Xenko",
        "current_version": FormatVersion.ZERO,
        "target_version": TARGET,
        "file_path": "Assets/Arial.xkfnt",
    }
    defaults.update(kwargs)
    return MigrationContext(**defaults)


@pytest.fixture
def make_context():
    return _make_context


@pytest.fixture
def context():
    return _make_context()


@pytest.fixture
def font_registry():
    registry = UpgraderRegistry()
    register_sprite_font(registry)
    registry.freeze()
    return registry


@pytest.fixture
def runner(font_registry):
    return MigrationRunner(font_registry)


@pytest.fixture
def legacy_font():
    """Unstamped sprite font written before either schema change."""
    document = wrap(
        {
            "Id": "8b9a2b5c",
            "FontName": "Arial",
            "NoPremultiply": True,
            "IsDynamic": True,
        }
    )
    document.tag = "!SpriteFont"
    return document
