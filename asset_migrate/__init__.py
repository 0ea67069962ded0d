"""
asset-migrate: keeps stored asset documents loadable as their schema evolves.

A stored asset is parsed into a generic document tree, its stamped format
version is compared with the current one, and the registered upgraders are
applied in order until the tree matches the current schema. Only then is it
handed to typed deserialization.

Subpackages:
- versioning: semantic format versions and their total order
- document: the generic tree, version stamps, and the YAML adapter
- migration: upgraders, the registry, and the runner state machine
- assets: built-in asset types and their upgraders
- config: settings schema and loaders
"""

__version__ = "1.0.0"

from . import assets, config, document, migration, utils, versioning

__all__ = [
    "assets",
    "config",
    "document",
    "migration",
    "utils",
    "versioning",
]
