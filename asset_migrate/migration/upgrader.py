"""
Upgrader records and the class-based upgrader base.

An upgrader advances a document of one schema across the half-open version
range ``[from_version, to_version)``. Its transform mutates the document in
place; it must not perform I/O, must not keep references to the document
after returning, and must be deterministic.

Two ways to write a transform:

- a plain function ``transform(document, context) -> None``;
- a subclass of :class:`UpgraderBase` implementing ``upgrade_asset``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from asset_migrate.document import MappingNode
from asset_migrate.errors import InvalidRange
from asset_migrate.versioning import FormatVersion

from .context import MigrationContext

Transform = Callable[[MappingNode, MigrationContext], None]


def _transform_name(transform: Transform) -> str:
    name = getattr(transform, "__name__", None)
    if name is None:
        name = type(transform).__name__
    return name


@dataclass(frozen=True)
class Upgrader:
    """
    Immutable binding of a transform to a schema and a version range.

    Attributes:
        schema_name: Schema the upgrader belongs to.
        from_version: First version the upgrader accepts (inclusive).
        to_version: Version the document is stamped with afterwards
            (exclusive upper bound of the range).
        transform: Callable mutating the document in place.
        name: Display name; defaults to the transform's name.
    """

    schema_name: str
    from_version: FormatVersion
    to_version: FormatVersion
    transform: Transform = field(compare=False, repr=False)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.from_version < self.to_version:
            raise InvalidRange(
                f"Upgrader range [{self.from_version}, {self.to_version}) "
                f"for schema '{self.schema_name}' is empty"
            )
        if not self.name:
            object.__setattr__(self, "name", _transform_name(self.transform))

    def contains(self, version: FormatVersion) -> bool:
        """True if ``version`` lies in ``[from_version, to_version)``."""
        return self.from_version <= version < self.to_version

    def overlaps(self, other: "Upgrader") -> bool:
        return (
            self.from_version < other.to_version
            and other.from_version < self.to_version
        )

    def apply(self, document: MappingNode, context: MigrationContext) -> None:
        self.transform(document, context)

    def __str__(self) -> str:
        return f"{self.name} [{self.from_version}, {self.to_version})"


class UpgraderBase(ABC):
    """
    Base class for upgraders that are easier to express as a class.

    Instances are callable with the plain transform signature, so they can be
    registered exactly like functions::

        class FontTypeUpgrader(UpgraderBase):
            def upgrade_asset(self, context, document):
                ...

        registry.register("Xenko", "1.5.0-alpha09", "1.7.0-beta02",
                          FontTypeUpgrader())
    """

    def __call__(self, document: MappingNode, context: MigrationContext) -> None:
        self.upgrade_asset(context, document)

    @abstractmethod
    def upgrade_asset(self, context: MigrationContext, document: MappingNode) -> None:
        """Mutate ``document`` in place."""
