"""
Assets Module

Built-in asset types and their upgraders.

Modules:
- sprite_font.py: sprite font upgraders (premultiply flag, font type)
- catalog.py: asset descriptors and the per-asset-type registry catalog
"""

from .catalog import (
    SPRITE_FONT_ASSET,
    AssetCatalog,
    AssetDescriptor,
    build_default_catalog,
)
from .sprite_font import (
    FontTypeUpgrader,
    SpriteFontType,
    premultiply_upgrader,
    register_sprite_font,
)

__all__ = [
    "AssetCatalog",
    "AssetDescriptor",
    "SPRITE_FONT_ASSET",
    "build_default_catalog",
    "FontTypeUpgrader",
    "SpriteFontType",
    "premultiply_upgrader",
    "register_sprite_font",
]
