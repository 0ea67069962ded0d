"""
Exception taxonomy for document migration and upgrader registration.

Migration errors carry enough identity (schema, file, stamped and target
versions) for the asset-loading caller to tell a human whether the tool is
too old (``FutureVersion``) or the asset is corrupt or unsupported
(``NoUpgradePath``). All of them are deterministic given the same input, so
callers should never retry.

Registration errors are raised during the initialisation phase, before any
document is migrated.
"""

from typing import Optional


class MigrationError(Exception):
    """Base class for every failure that aborts a document migration.

    Attributes:
        schema_name: Name of the schema being migrated, when known.
        file_path: Logical path of the document, when known.
        stamped_version: Version stamped on the document (text form).
        target_version: Version the runner was migrating towards (text form).
    """

    def __init__(
        self,
        message: str,
        *,
        schema_name: Optional[str] = None,
        file_path: Optional[str] = None,
        stamped_version=None,
        target_version=None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.schema_name = schema_name
        self.file_path = file_path
        self.stamped_version = (
            str(stamped_version) if stamped_version is not None else None
        )
        self.target_version = (
            str(target_version) if target_version is not None else None
        )

    def with_identity(
        self,
        *,
        schema_name: Optional[str] = None,
        file_path: Optional[str] = None,
        stamped_version=None,
        target_version=None,
    ) -> "MigrationError":
        """Fill in identity fields that are still unset and return ``self``."""
        if self.schema_name is None:
            self.schema_name = schema_name
        if self.file_path is None:
            self.file_path = file_path
        if self.stamped_version is None and stamped_version is not None:
            self.stamped_version = str(stamped_version)
        if self.target_version is None and target_version is not None:
            self.target_version = str(target_version)
        return self

    def report(self) -> str:
        """Single-line, human readable description for asset-loading logs."""
        return (
            f"{type(self).__name__}: {self.message} "
            f"[schema={self.schema_name or '?'}, "
            f"file={self.file_path or '<memory>'}, "
            f"stamped={self.stamped_version or '?'}, "
            f"target={self.target_version or '?'}]"
        )


class MalformedVersion(MigrationError, ValueError):
    """A version stamp does not match ``MAJOR.MINOR.PATCH[-PRERELEASE]``."""

    def __init__(self, text, **kwargs) -> None:
        super().__init__(f"Malformed version string {text!r}", **kwargs)
        self.text = text


class FutureVersion(MigrationError):
    """The document was written by a newer tool than this one understands."""


class NoUpgradePath(MigrationError):
    """No registered upgrader covers the document's current version."""


class MigrationLoopDetected(MigrationError):
    """The upgrade chain did not converge; the registry is misconfigured."""


class TransformFailed(MigrationError):
    """An upgrader could not interpret a legacy field.

    Attributes:
        field_name: Name of the offending field, when the transform knows it.
        upgrader_name: Name of the upgrader that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: Optional[str] = None,
        upgrader_name: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field_name = field_name
        self.upgrader_name = upgrader_name

    def report(self) -> str:
        details = []
        if self.upgrader_name:
            details.append(f"upgrader={self.upgrader_name}")
        if self.field_name:
            details.append(f"field={self.field_name}")
        base = super().report()
        return f"{base} {' '.join(details)}" if details else base


class RegistryError(Exception):
    """Base class for upgrader registration problems."""


class InvalidRange(RegistryError, ValueError):
    """An upgrader range is empty or inverted."""


class OverlappingRange(RegistryError):
    """Two upgraders for the same schema cover a common version."""


class RangeGap(RegistryError):
    """Consecutive upgrader ranges for a schema do not meet."""


class RegistryFrozen(RegistryError):
    """Registration was attempted after the initialisation phase."""
