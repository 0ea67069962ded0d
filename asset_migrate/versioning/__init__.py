"""Semantic format versions and their ordering."""

from .format_version import FormatVersion, VersionLike, coerce_version, compare

__all__ = ["FormatVersion", "VersionLike", "coerce_version", "compare"]
