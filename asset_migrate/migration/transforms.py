"""
Reusable field-level edits for upgrader transforms.

Legacy fields are probed softly: an absent, blanked or null field is simply
skipped. A present field whose value cannot be interpreted raises
:class:`TransformFailed` naming the field and schema.
"""

from typing import Iterable, Optional

from asset_migrate.document import MappingNode, ScalarNode, ScalarTypeError
from asset_migrate.errors import TransformFailed
from asset_migrate.utils.logging_utils import get_logger

from .context import MigrationContext

LOGGER = get_logger(__name__)


def _failure(message: str, key: str, context: MigrationContext) -> TransformFailed:
    return TransformFailed(
        message,
        field_name=key,
        schema_name=context.schema_name,
        file_path=context.file_path,
        stamped_version=context.current_version,
        target_version=context.target_version,
    )


def read_legacy_bool(
    document: MappingNode, key: str, context: MigrationContext
) -> Optional[bool]:
    """Return the boolean stored under ``key``, or ``None`` if there is none.

    Raises:
        TransformFailed: If ``key`` holds anything but a boolean scalar.
    """
    node = document.probe(key)
    if node is None:
        return None
    if not isinstance(node, ScalarNode):
        raise _failure(
            f"Legacy field '{key}' must be a boolean, got a {node.kind}", key, context
        )
    try:
        return node.as_bool(key)
    except ScalarTypeError as exc:
        raise _failure(str(exc), key, context) from exc


def invert_bool_rename(
    document: MappingNode,
    legacy_keys: Iterable[str],
    new_key: str,
    context: MigrationContext,
) -> bool:
    """Set ``new_key`` to the negation of each present legacy alias.

    Each alias found is blanked with ``EMPTY`` rather than deleted so its
    position in the file is kept. Aliases are processed in order, so when
    several are present the last one wins.

    Returns:
        True if at least one alias was converted.
    """
    converted = []
    for key in legacy_keys:
        value = read_legacy_bool(document, key, context)
        if value is None:
            continue
        document.set(new_key, not value)
        document.blank(key)
        converted.append(key)
        LOGGER.trace("%s: %s=%s -> %s=%s", context.describe(), key, value, new_key, not value)

    if len(converted) > 1:
        context.warn(
            f"Legacy fields {converted} all map to '{new_key}'; "
            f"'{converted[-1]}' takes precedence"
        )
    return bool(converted)


def materialize_enum(
    document: MappingNode,
    legacy_key: str,
    new_key: str,
    true_label: str,
    false_label: str,
    context: MigrationContext,
) -> bool:
    """Replace boolean ``legacy_key`` by the string enum field ``new_key``.

    The legacy field is removed outright. A legacy key holding no value
    (null or blanked) is removed without adding ``new_key``.

    Returns:
        True if ``new_key`` was added.

    Raises:
        TransformFailed: If the legacy value is not a boolean or ``new_key``
            is already present.
    """
    value = read_legacy_bool(document, legacy_key, context)
    if value is None:
        if document.remove_child(legacy_key) is not None:
            LOGGER.trace("%s: dropped empty %s", context.describe(), legacy_key)
        return False

    if document.has(new_key):
        raise _failure(
            f"Cannot derive '{new_key}' from '{legacy_key}': "
            f"'{new_key}' is already present",
            new_key,
            context,
        )

    label = true_label if value else false_label
    document.add_child(new_key, label)
    document.remove_child(legacy_key)
    LOGGER.trace("%s: %s=%s -> %s=%s", context.describe(), legacy_key, value, new_key, label)
    return True
