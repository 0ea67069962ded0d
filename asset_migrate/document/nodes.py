"""
Generic document tree used while a stored asset is being migrated.

A document is a tagged union of four node kinds:

- ``MappingNode``: insertion-ordered string keys mapped to nodes, with an
  optional YAML tag (``!SpriteFont``).
- ``SequenceNode``: ordered list of nodes.
- ``ScalarNode``: a primitive value (``str``, ``bool``, ``int``, ``float``
  or ``None``) read and written without implicit coercion.
- ``EMPTY``: the single ``EmptyMarker`` instance, an explicit tombstone for a
  field that was blanked instead of deleted.

Every field accessor on ``MappingNode`` fails softly: probing a key that does
not exist returns ``None`` so upgraders can test optional legacy fields
without guarding every access.

Usage:
    >>> doc = wrap({"NoPremultiply": True})
    >>> doc.probe("NoPremultiply").as_bool()
    True
    >>> doc.blank("NoPremultiply")
    True
    >>> doc.get("NoPremultiply") is EMPTY
    True
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

SCALAR_TYPES = (str, bool, int, float, type(None))


class ScalarTypeError(TypeError):
    """A scalar does not hold the primitive type the caller asked for."""

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.field_name = field_name


class Node:
    """Base class of every document node."""

    __slots__ = ()
    __hash__ = None

    kind = "node"


class EmptyMarker(Node):
    """Tombstone distinguishing "blanked on purpose" from "absent"."""

    __slots__ = ()
    kind = "empty"
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (EmptyMarker, ())

    def __eq__(self, other):
        return other is self

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = EmptyMarker()


class ScalarNode(Node):
    """A single primitive value with an optional YAML tag."""

    __slots__ = ("value", "tag", "source")
    kind = "scalar"

    def __init__(self, value: Any, tag: Optional[str] = None, source=None) -> None:
        if not isinstance(value, SCALAR_TYPES):
            raise TypeError(
                f"Scalar values must be str, bool, int, float or None, "
                f"got {type(value).__name__}"
            )
        self.value = value
        self.tag = tag
        # (loaded value, text, resolved tag, style) when read from a file
        self.source = source

    @property
    def is_null(self) -> bool:
        return self.value is None

    def as_bool(self, field_name: Optional[str] = None) -> bool:
        """Return the value if it is a real boolean.

        Raises:
            ScalarTypeError: For any other value, including the strings
                ``"true"``/``"false"`` and the integers ``0``/``1``.
        """
        if isinstance(self.value, bool):
            return self.value
        raise ScalarTypeError(
            f"Expected a boolean{f' for {field_name!r}' if field_name else ''}, "
            f"got {self.value!r}",
            field_name=field_name,
        )

    def as_text(self, field_name: Optional[str] = None) -> str:
        if isinstance(self.value, str):
            return self.value
        raise ScalarTypeError(
            f"Expected a string{f' for {field_name!r}' if field_name else ''}, "
            f"got {self.value!r}",
            field_name=field_name,
        )

    def __eq__(self, other):
        if not isinstance(other, ScalarNode):
            return NotImplemented
        # bool is an int subclass; True must not equal 1 here
        return (
            type(self.value) is type(other.value)
            and self.value == other.value
            and self.tag == other.tag
        )

    def __repr__(self) -> str:
        if self.tag:
            return f"ScalarNode({self.value!r}, tag={self.tag!r})"
        return f"ScalarNode({self.value!r})"


class SequenceNode(Node):
    """Ordered list of nodes."""

    __slots__ = ("items", "tag")
    kind = "sequence"

    def __init__(self, items=None, tag: Optional[str] = None) -> None:
        self.items: List[Node] = [wrap(item) for item in (items or [])]
        self.tag = tag

    def append(self, value: Any) -> Node:
        node = wrap(value)
        self.items.append(node)
        return node

    def get(self, index: int) -> Optional[Node]:
        """Return the node at ``index`` or ``None`` when out of range."""
        if -len(self.items) <= index < len(self.items):
            return self.items[index]
        return None

    def __getitem__(self, index: int) -> Node:
        return self.items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.items[index] = wrap(value)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other):
        if not isinstance(other, SequenceNode):
            return NotImplemented
        return self.tag == other.tag and self.items == other.items

    def __repr__(self) -> str:
        return f"SequenceNode({self.items!r})"


class MappingNode(Node):
    """Insertion-ordered mapping from string keys to nodes."""

    __slots__ = ("_children", "tag")
    kind = "mapping"

    def __init__(self, children=None, tag: Optional[str] = None) -> None:
        self._children: Dict[str, Node] = {}
        self.tag = tag
        for key, value in (children or {}).items():
            self.set(key, value)

    # ------------------------------------------------------------------
    # Soft access
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[Node]:
        """Return the child stored under ``key`` or ``None`` if absent."""
        return self._children.get(key)

    def has(self, key: str) -> bool:
        return key in self._children

    def probe(self, key: str) -> Optional[Node]:
        """Return the child under ``key`` if it carries a value.

        Absent keys, blanked (``EMPTY``) values and null scalars all probe
        as ``None``.
        """
        node = self._children.get(key)
        if node is None or node is EMPTY:
            return None
        if isinstance(node, ScalarNode) and node.is_null:
            return None
        return node

    def get_scalar(self, key: str) -> Optional[ScalarNode]:
        """Probe ``key`` and return it only when it is a scalar."""
        node = self.probe(key)
        return node if isinstance(node, ScalarNode) else None

    def get_mapping(self, key: str) -> Optional["MappingNode"]:
        node = self.probe(key)
        return node if isinstance(node, MappingNode) else None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> Node:
        """Store ``value`` under ``key``.

        An existing key keeps its position; a new key is appended.
        """
        if not isinstance(key, str):
            raise TypeError(f"Mapping keys must be strings, got {type(key).__name__}")
        node = wrap(value)
        self._children[key] = node
        return node

    def add_child(self, key: str, value: Any) -> Node:
        """Append a new ``key``; raises ``KeyError`` if it already exists."""
        if key in self._children:
            raise KeyError(f"Key {key!r} already present")
        return self.set(key, value)

    def insert_first(self, key: str, value: Any) -> Node:
        """Store ``value`` under ``key`` at the front of the mapping."""
        node = wrap(value)
        remaining = {k: v for k, v in self._children.items() if k != key}
        self._children = {key: node}
        self._children.update(remaining)
        return node

    def remove_child(self, key: str) -> Optional[Node]:
        """Delete ``key`` and return its node, or ``None`` if it was absent."""
        return self._children.pop(key, None)

    def blank(self, key: str) -> bool:
        """Replace the value of an existing ``key`` by ``EMPTY`` in place.

        Returns:
            True if the key existed and was blanked.
        """
        if key not in self._children:
            return False
        self._children[key] = EMPTY
        return True

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------

    def keys(self) -> List[str]:
        return list(self._children.keys())

    def items(self) -> List[Tuple[str, Node]]:
        return list(self._children.items())

    def __contains__(self, key: object) -> bool:
        return key in self._children

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __eq__(self, other):
        if not isinstance(other, MappingNode):
            return NotImplemented
        return self.tag == other.tag and self.items() == other.items()

    def __repr__(self) -> str:
        prefix = f"{self.tag} " if self.tag else ""
        return f"MappingNode({prefix}{dict(self._children)!r})"


def wrap(value: Any) -> Node:
    """Convert plain Python data (dicts, lists, primitives) into nodes."""
    if isinstance(value, Node):
        return value
    if isinstance(value, dict):
        return MappingNode(value)
    if isinstance(value, (list, tuple)):
        return SequenceNode(value)
    return ScalarNode(value)


def unwrap(node: Node) -> Any:
    """Convert a node tree back into plain Python data.

    ``EMPTY`` unwraps to ``None``; tags are dropped.
    """
    if node is EMPTY:
        return None
    if isinstance(node, ScalarNode):
        return node.value
    if isinstance(node, SequenceNode):
        return [unwrap(item) for item in node]
    if isinstance(node, MappingNode):
        return {key: unwrap(child) for key, child in node.items()}
    raise TypeError(f"Not a document node: {node!r}")


def deep_copy(node: Node) -> Node:
    """Return an independent copy of ``node``; ``EMPTY`` stays a singleton."""
    if node is EMPTY:
        return EMPTY
    if isinstance(node, ScalarNode):
        return ScalarNode(node.value, tag=node.tag, source=node.source)
    if isinstance(node, SequenceNode):
        return SequenceNode([deep_copy(item) for item in node], tag=node.tag)
    if isinstance(node, MappingNode):
        return MappingNode(
            {key: deep_copy(child) for key, child in node.items()}, tag=node.tag
        )
    raise TypeError(f"Not a document node: {node!r}")
