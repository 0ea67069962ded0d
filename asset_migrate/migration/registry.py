"""
Module: registry

Holds every upgrader known to the process, grouped by schema name and keyed
by version range.

Lifecycle:
    Registration happens during a defined initialisation phase (each schema
    owner calls :meth:`UpgraderRegistry.register` or applies the
    :meth:`UpgraderRegistry.upgrader` decorator). After that the registry is
    read-only in practice, and :meth:`UpgraderRegistry.freeze` makes it
    read-only for real. Lookups may then run from any number of threads.

Range rules, per schema:
    - ranges are half-open ``[from, to)`` and must not overlap; an overlap is
      rejected as soon as the second range is registered;
    - sorted by ``from``, each range must start where the previous one ends,
      and the last one must end at the declared format version. Gaps are
      checked lazily on the first lookup for the schema (registration order
      is free, so a gap may be temporary while modules are still
      registering) and at the latest by :meth:`freeze`.

Example:
    registry = UpgraderRegistry()

    @registry.upgrader("Xenko", "0.0.0", "1.5.0-alpha09")
    def premultiply(document, context):
        ...

    registry.declare_format_version("Xenko", "1.5.0-alpha09")
    registry.freeze()
"""

import threading
from typing import Callable, Dict, List, Optional, Set

from asset_migrate.errors import (
    InvalidRange,
    OverlappingRange,
    RangeGap,
    RegistryError,
    RegistryFrozen,
)
from asset_migrate.utils.logging_utils import get_logger
from asset_migrate.versioning import FormatVersion, VersionLike, coerce_version

from .upgrader import Transform, Upgrader

LOGGER = get_logger(__name__)


class UpgraderRegistry:
    """Per-schema collection of contiguous, non-overlapping upgraders."""

    def __init__(self) -> None:
        self._upgraders: Dict[str, List[Upgrader]] = {}
        self._format_versions: Dict[str, FormatVersion] = {}
        self._validated: Set[str] = set()
        self._frozen = False
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        schema_name: str,
        from_version: VersionLike,
        to_version: VersionLike,
        transform: Transform,
        name: Optional[str] = None,
    ) -> Upgrader:
        """Register ``transform`` for ``[from_version, to_version)``.

        Returns:
            The immutable :class:`Upgrader` record.

        Raises:
            MalformedVersion: If a bound is not a valid version string.
            InvalidRange: If the range is empty or inverted.
            OverlappingRange: If the range overlaps one already registered
                for ``schema_name``.
            RegistryFrozen: If called after :meth:`freeze`.
        """
        self._check_writable()
        upgrader = Upgrader(
            schema_name,
            coerce_version(from_version),
            coerce_version(to_version),
            transform,
            name or "",
        )

        with self._lock:
            chain = self._upgraders.setdefault(schema_name, [])
            for other in chain:
                if other.overlaps(upgrader):
                    raise OverlappingRange(
                        f"Upgrader {upgrader} overlaps {other} "
                        f"for schema '{schema_name}'"
                    )
            chain.append(upgrader)
            chain.sort(key=lambda item: item.from_version.sort_key())
            self._validated.discard(schema_name)

        LOGGER.info(
            "Registered %s upgrader %s: %s -> %s",
            schema_name,
            upgrader.name,
            upgrader.from_version,
            upgrader.to_version,
        )
        return upgrader

    def upgrader(
        self,
        schema_name: str,
        from_version: VersionLike,
        to_version: VersionLike,
        name: Optional[str] = None,
    ) -> Callable[[Transform], Transform]:
        """Decorator form of :meth:`register`; returns the transform unchanged."""

        def decorator(transform: Transform) -> Transform:
            self.register(schema_name, from_version, to_version, transform, name)
            return transform

        return decorator

    def declare_format_version(self, schema_name: str, version: VersionLike) -> None:
        """Declare the current format version of ``schema_name``.

        Raises:
            RegistryError: If a different version was already declared.
        """
        self._check_writable()
        version = coerce_version(version)
        with self._lock:
            declared = self._format_versions.get(schema_name)
            if declared is not None and declared != version:
                raise RegistryError(
                    f"Schema '{schema_name}' already declares format version "
                    f"{declared}, cannot redeclare as {version}"
                )
            self._format_versions[schema_name] = version
            self._validated.discard(schema_name)

    def freeze(self) -> None:
        """Validate every schema and reject further registration.

        Raises:
            RangeGap: If any schema's chain has a gap.
        """
        for schema_name in self.schemas():
            self.ensure_valid(schema_name)
        self._frozen = True
        LOGGER.debug("Upgrader registry frozen with %d upgrader(s)", len(self))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozen(
                "Upgrader registry is frozen; register upgraders during "
                "initialisation, before any document is migrated"
            )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, schema_name: str) -> None:
        """Check that the ranges of ``schema_name`` form one contiguous chain.

        Raises:
            RangeGap: If two consecutive ranges do not meet, or the chain
                stops short of the declared format version.
            InvalidRange: If the chain runs past the declared format version.
        """
        chain = self._upgraders.get(schema_name, [])
        for previous, following in zip(chain, chain[1:]):
            if previous.to_version != following.from_version:
                raise RangeGap(
                    f"Schema '{schema_name}' has no upgrader for "
                    f"[{previous.to_version}, {following.from_version}) "
                    f"between {previous.name} and {following.name}"
                )

        declared = self._format_versions.get(schema_name)
        if declared is None or not chain:
            return
        end = chain[-1].to_version
        if end < declared:
            raise RangeGap(
                f"Schema '{schema_name}' upgraders stop at {end} but the "
                f"format version is {declared}"
            )
        if end > declared:
            raise InvalidRange(
                f"Upgrader {chain[-1]} for schema '{schema_name}' runs past "
                f"the format version {declared}"
            )

    def ensure_valid(self, schema_name: str) -> None:
        """Validate ``schema_name`` once; later calls are free."""
        if schema_name in self._validated:
            return
        with self._lock:
            if schema_name in self._validated:
                return
            self.validate(schema_name)
            self._validated.add(schema_name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def target_version(self, schema_name: str) -> Optional[FormatVersion]:
        """Current format version of ``schema_name``.

        The declared version wins; otherwise the end of the last range;
        ``None`` for an unknown schema.
        """
        declared = self._format_versions.get(schema_name)
        if declared is not None:
            return declared
        chain = self._upgraders.get(schema_name)
        if chain:
            return chain[-1].to_version
        return None

    def find_upgrader(
        self, schema_name: str, version: FormatVersion
    ) -> Optional[Upgrader]:
        """Return the upgrader whose range contains ``version``.

        Returns ``None`` if ``version`` is already at or past the schema's
        current version, or if it falls outside every registered range (the
        caller reports that as ``NoUpgradePath``).

        Raises:
            RangeGap: On the first lookup of a misconfigured schema.
        """
        self.ensure_valid(schema_name)
        target = self.target_version(schema_name)
        if target is None or version >= target:
            return None
        for upgrader in self._upgraders.get(schema_name, ()):
            if upgrader.contains(version):
                return upgrader
        return None

    def upgraders(self, schema_name: str) -> List[Upgrader]:
        """Upgraders of ``schema_name`` sorted by starting version."""
        return list(self._upgraders.get(schema_name, ()))

    def schemas(self) -> List[str]:
        return sorted(set(self._upgraders) | set(self._format_versions))

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------

    def __contains__(self, schema_name: str) -> bool:
        return schema_name in self._upgraders or schema_name in self._format_versions

    def __len__(self) -> int:
        return sum(len(chain) for chain in self._upgraders.values())

    def __repr__(self) -> str:
        return f"UpgraderRegistry({self.schemas()}, upgraders={len(self)})"
