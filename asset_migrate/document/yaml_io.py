"""
YAML adapter between asset files and the generic document tree.

PyYAML's composer is used instead of ``yaml.safe_load`` so that application
tags such as ``!SpriteFont`` survive the round trip and key order is kept
exactly as authored. Core-schema scalars (null, bool, int, float, str) are
constructed by the safe constructor, and each remembers its source text so an
unchanged value is written back exactly as authored (``0123`` stays ``0123``,
``yes`` stays ``yes``). Any other scalar keeps its raw text and tag.

Usage::

    from asset_migrate.document.yaml_io import dump_document, load_document

    document = load_document(path.read_text(encoding="utf-8"))
    ...
    path.write_text(dump_document(document), encoding="utf-8")
"""

from pathlib import Path
from typing import Union

import yaml

from .nodes import EMPTY, MappingNode, Node, ScalarNode, SequenceNode

_CORE = "tag:yaml.org,2002:"
_MAP_TAG = _CORE + "map"
_SEQ_TAG = _CORE + "seq"
_NULL_TAG = _CORE + "null"
_CONSTRUCTED_SCALAR_TAGS = {
    _CORE + "null",
    _CORE + "bool",
    _CORE + "int",
    _CORE + "float",
    _CORE + "str",
}


class DocumentFormatError(ValueError):
    """The YAML text is valid but does not describe a document tree."""


# =============================================================================
# Loading
# =============================================================================


def load_document(text: str) -> MappingNode:
    """Parse YAML ``text`` into a :class:`MappingNode`.

    Raises:
        yaml.YAMLError: If the text is not valid YAML.
        DocumentFormatError: If the root is not a mapping, a key is not a
            scalar, or a key appears twice in one mapping.
    """
    loader = yaml.SafeLoader(text)
    try:
        root = loader.get_single_node()
        if root is None:
            raise DocumentFormatError("Document is empty")
        if not isinstance(root, yaml.MappingNode):
            raise DocumentFormatError(
                f"Expected a mapping at the document root, got {root.id}"
            )
        return _from_yaml(root, loader)
    finally:
        loader.dispose()


def load_document_file(path: Union[str, Path]) -> MappingNode:
    """Load a document from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not UTF-8 text.
        yaml.YAMLError: If the file contains invalid YAML syntax.
        DocumentFormatError: If the YAML does not describe a document tree.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Asset file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            return load_document(fh.read())
        except yaml.YAMLError as exc:
            raise yaml.YAMLError(f"Invalid YAML in {path}: {exc}") from exc


def _from_yaml(node: yaml.Node, loader: yaml.SafeLoader) -> Node:
    if isinstance(node, yaml.ScalarNode):
        if node.tag in _CONSTRUCTED_SCALAR_TAGS:
            value = loader.construct_object(node)
            return ScalarNode(value, source=(value, node.value, node.tag, node.style))
        return ScalarNode(node.value, tag=node.tag)

    if isinstance(node, yaml.SequenceNode):
        tag = None if node.tag == _SEQ_TAG else node.tag
        return SequenceNode([_from_yaml(item, loader) for item in node.value], tag=tag)

    tag = None if node.tag == _MAP_TAG else node.tag
    mapping = MappingNode(tag=tag)
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise DocumentFormatError(
                f"Mapping keys must be scalars {key_node.start_mark}"
            )
        key = key_node.value
        if key in mapping:
            raise DocumentFormatError(
                f"Duplicate key {key!r} {key_node.start_mark}"
            )
        mapping.set(key, _from_yaml(value_node, loader))
    return mapping


# =============================================================================
# Dumping
# =============================================================================


def dump_document(document: MappingNode) -> str:
    """Serialize ``document`` to block-style YAML text.

    ``EMPTY`` fields are written as empty values so the key keeps its place.
    """
    representer = yaml.representer.SafeRepresenter()
    return yaml.serialize(
        _to_yaml(document, representer),
        Dumper=yaml.SafeDumper,
        allow_unicode=True,
    )


def dump_document_file(document: MappingNode, path: Union[str, Path]) -> None:
    """Write ``document`` to ``path`` as UTF-8 YAML.

    The text is fully serialized before ``path`` is opened, so a failure
    leaves the existing file untouched.
    """
    text = dump_document(document)
    with open(Path(path), "w", encoding="utf-8") as fh:
        fh.write(text)


def _unchanged(node: ScalarNode) -> bool:
    """True if ``node`` still holds the value it was loaded with."""
    if node.source is None:
        return False
    loaded = node.source[0]
    return type(loaded) is type(node.value) and loaded == node.value


def _to_yaml(node: Node, representer: yaml.representer.SafeRepresenter) -> yaml.Node:
    if node is EMPTY:
        return yaml.ScalarNode(_NULL_TAG, "")

    if isinstance(node, ScalarNode):
        if node.tag:
            raw = "" if node.value is None else str(node.value)
            return yaml.ScalarNode(node.tag, raw)
        if _unchanged(node):
            _, text, tag, style = node.source
            return yaml.ScalarNode(tag, text, style=style)
        return representer.represent_data(node.value)

    if isinstance(node, SequenceNode):
        return yaml.SequenceNode(
            node.tag or _SEQ_TAG,
            [_to_yaml(item, representer) for item in node],
            flow_style=False,
        )

    if isinstance(node, MappingNode):
        return yaml.MappingNode(
            node.tag or _MAP_TAG,
            [
                (representer.represent_data(key), _to_yaml(child, representer))
                for key, child in node.items()
            ],
            flow_style=False,
        )

    raise TypeError(f"Not a document node: {node!r}")
