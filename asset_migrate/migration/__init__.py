"""
Migration Module

Upgrader records, the per-schema registry, the field-level transform
helpers, and the runner that walks a document up the upgrader chain.
"""

from .context import MigrationContext
from .registry import UpgraderRegistry
from .runner import (
    MigrationJob,
    MigrationResult,
    MigrationRunner,
    MigrationState,
)
from .transforms import invert_bool_rename, materialize_enum, read_legacy_bool
from .upgrader import Transform, Upgrader, UpgraderBase

__all__ = [
    "MigrationContext",
    "UpgraderRegistry",
    "MigrationJob",
    "MigrationResult",
    "MigrationRunner",
    "MigrationState",
    "invert_bool_rename",
    "materialize_enum",
    "read_legacy_bool",
    "Transform",
    "Upgrader",
    "UpgraderBase",
]
