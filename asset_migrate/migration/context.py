"""MigrationContext: per-run identity and diagnostics passed to upgraders.

A context is built once per document migration and handed by reference to
every upgrader in the chain. Its identity fields are frozen; the only thing
that grows during the run is the diagnostics list, which upgraders fill via
:meth:`MigrationContext.warn` for non-fatal oddities they want surfaced.

Usage::

    context = MigrationContext(
        schema_name="Xenko",
        current_version=FormatVersion.parse("0.0.0"),
        target_version=FormatVersion.parse("1.7.0-beta02"),
        file_path="Assets/Arial.xkfnt",
    )
    context.warn("Both NoPremultiply and IsNotPremultiply present")
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from asset_migrate.utils.logging_utils import get_logger
from asset_migrate.versioning import FormatVersion

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class MigrationContext:
    """
    Identity of a single migration run.

    Attributes:
        schema_name: Schema being migrated.
        current_version: Version the document was stamped with at the start.
        target_version: Version the run migrates towards.
        file_path: Logical path of the document, used in error messages.
        logger: Logger upgraders should report through.
    """

    schema_name: str
    current_version: FormatVersion
    target_version: FormatVersion
    file_path: Optional[str] = None
    logger: logging.Logger = field(default=LOGGER, compare=False, repr=False)
    diagnostic_log: List[str] = field(
        default_factory=list, compare=False, repr=False
    )

    @property
    def diagnostics(self) -> Tuple[str, ...]:
        """Warnings recorded so far, in order."""
        return tuple(self.diagnostic_log)

    def warn(self, message: str) -> None:
        """Record a non-fatal diagnostic and log it with the file identity."""
        self.diagnostic_log.append(message)
        self.logger.warning("%s: %s", self.describe(), message)

    def describe(self) -> str:
        """Short identity line: ``<file> [<schema> <current> -> <target>]``."""
        return (
            f"{self.file_path or '<memory>'} "
            f"[{self.schema_name} {self.current_version} -> {self.target_version}]"
        )
