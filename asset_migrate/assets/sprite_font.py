"""
Upgraders for sprite font assets (``!SpriteFont``, ``.xkfnt``).

Two historical schema changes are covered:

- ``[0.0.0, 1.5.0-alpha09)``: the negative ``NoPremultiply`` /
  ``IsNotPremultiply`` flags became the positive ``IsPremultiplied``. The
  legacy fields are blanked rather than deleted so hand-edited files keep
  their layout.
- ``[1.5.0-alpha09, 1.7.0-beta02)``: the ``IsDynamic`` flag became the
  ``FontType`` enum and is removed.
"""

from enum import Enum

from asset_migrate.document import MappingNode
from asset_migrate.migration import (
    MigrationContext,
    UpgraderBase,
    UpgraderRegistry,
    invert_bool_rename,
    materialize_enum,
)

PACKAGE_NAME = "Xenko"
SPRITE_FONT_TAG = "!SpriteFont"
FILE_EXTENSION = ".xkfnt;.pdxfnt"
FORMAT_VERSION = "1.7.0-beta02"

PREMULTIPLY_VERSION = "1.5.0-alpha09"

LEGACY_PREMULTIPLY_ALIASES = ("NoPremultiply", "IsNotPremultiply")


class SpriteFontType(str, Enum):
    """How glyphs are generated: offline, offline as a distance field, or at run-time."""

    STATIC = "Static"
    SDF = "SDF"
    DYNAMIC = "Dynamic"


def premultiply_upgrader(document: MappingNode, context: MigrationContext) -> None:
    """``NoPremultiply``/``IsNotPremultiply`` -> ``IsPremultiplied`` (negated)."""
    invert_bool_rename(
        document, LEGACY_PREMULTIPLY_ALIASES, "IsPremultiplied", context
    )


class FontTypeUpgrader(UpgraderBase):
    """``IsDynamic`` -> ``FontType``."""

    def upgrade_asset(self, context: MigrationContext, document: MappingNode) -> None:
        # SDF fonts did not exist yet, so old assets never map to them
        materialize_enum(
            document,
            "IsDynamic",
            "FontType",
            SpriteFontType.DYNAMIC.value,
            SpriteFontType.STATIC.value,
            context,
        )


def register_sprite_font(registry: UpgraderRegistry) -> None:
    """Register the sprite font upgraders and declare its format version."""
    registry.register(
        PACKAGE_NAME, "0.0.0", PREMULTIPLY_VERSION, premultiply_upgrader
    )
    registry.register(
        PACKAGE_NAME, PREMULTIPLY_VERSION, FORMAT_VERSION, FontTypeUpgrader()
    )
    registry.declare_format_version(PACKAGE_NAME, FORMAT_VERSION)
