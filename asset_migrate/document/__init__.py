"""
Document Module

The generic, pre-typed tree a stored asset is parsed into, helpers for its
format-version stamp, and the YAML adapter used to read and write asset
files.
"""

from .nodes import (
    EMPTY,
    EmptyMarker,
    MappingNode,
    Node,
    ScalarNode,
    ScalarTypeError,
    SequenceNode,
    deep_copy,
    unwrap,
    wrap,
)
from .stamp import DEFAULT_VERSION_KEY, read_stamp, write_stamp
from .yaml_io import (
    DocumentFormatError,
    dump_document,
    dump_document_file,
    load_document,
    load_document_file,
)

__all__ = [
    # Nodes
    "EMPTY",
    "EmptyMarker",
    "MappingNode",
    "Node",
    "ScalarNode",
    "ScalarTypeError",
    "SequenceNode",
    "deep_copy",
    "unwrap",
    "wrap",
    # Stamps
    "DEFAULT_VERSION_KEY",
    "read_stamp",
    "write_stamp",
    # YAML
    "DocumentFormatError",
    "dump_document",
    "dump_document_file",
    "load_document",
    "load_document_file",
]
