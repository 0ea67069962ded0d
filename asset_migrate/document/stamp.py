"""
Reading and writing the format-version stamp of a document.

Stamps live in a reserved root field (``SerializedVersion`` by default)
that maps each schema name the document implements to its version text::

    !SpriteFont
    SerializedVersion: {Xenko: 1.7.0-beta02}
    FontType: Dynamic
"""

from typing import Optional

from asset_migrate.errors import MalformedVersion
from asset_migrate.versioning import FormatVersion, VersionLike, coerce_version

from .nodes import MappingNode, ScalarNode

DEFAULT_VERSION_KEY = "SerializedVersion"


def read_stamp(
    document: MappingNode,
    schema_name: str,
    default: Optional[FormatVersion] = FormatVersion.ZERO,
    key: str = DEFAULT_VERSION_KEY,
) -> Optional[FormatVersion]:
    """Return the version ``document`` is stamped with for ``schema_name``.

    Args:
        document: Root mapping of the document.
        schema_name: Schema whose stamp is requested.
        default: Returned when the document carries no stamp for the schema.
        key: Name of the reserved stamp field.

    Raises:
        MalformedVersion: If the stamp exists but cannot be parsed, or if the
            stamp field is not a mapping.
    """
    stamps = document.probe(key)
    if stamps is None:
        return default
    if not isinstance(stamps, MappingNode):
        raise MalformedVersion(repr(stamps), schema_name=schema_name)

    stamp = stamps.probe(schema_name)
    if stamp is None:
        return default
    if not isinstance(stamp, ScalarNode):
        raise MalformedVersion(repr(stamp), schema_name=schema_name)

    value = stamp.value
    if not isinstance(value, str):
        # a bare ``1.5`` in YAML loads as a float; it is still not a version
        raise MalformedVersion(str(value), schema_name=schema_name)
    try:
        return FormatVersion.parse(value)
    except MalformedVersion as exc:
        raise exc.with_identity(schema_name=schema_name)


def write_stamp(
    document: MappingNode,
    schema_name: str,
    version: VersionLike,
    key: str = DEFAULT_VERSION_KEY,
) -> FormatVersion:
    """Stamp ``document`` with ``version`` for ``schema_name``.

    A missing stamp field is created at the front of the root mapping so the
    version stays the first thing a human sees in the file.
    """
    version = coerce_version(version)
    stamps = document.get_mapping(key)
    if stamps is None:
        stamps = MappingNode()
        document.insert_first(key, stamps)
    stamps.set(schema_name, ScalarNode(str(version)))
    return version
