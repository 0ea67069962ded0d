"""
Module: runner

Drives a document from its stamped format version to the target version by
repeatedly applying the registered upgrader that covers the current version.

State machine:
    START      read the stamp (missing -> settings' default, ``0.0.0``)
               equal to target   -> DONE, no mutation
               newer than target -> FAILED (FutureVersion), no mutation
    UPGRADING  find upgrader for the current version
               none              -> FAILED (NoUpgradePath)
               ends past target  -> FAILED (NoUpgradePath)
               apply, re-stamp with the upgrader's ``to_version``, loop
               more steps than registered upgraders + 1
                                 -> FAILED (MigrationLoopDetected)
    DONE       document stamped exactly at the target version
    FAILED     document left as it was when the error occurred; callers must
               discard it and never persist it

The migration happens BEFORE typed deserialization: the caller binds the
returned tree to its concrete schema only when the result is DONE.

Example:
    runner = MigrationRunner(registry)
    result = runner.run(document, "Xenko", file_path="Assets/Arial.xkfnt")
    if not result.success:
        LOGGER.error(result.error.report())
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from asset_migrate.config import MigrationSettings
from asset_migrate.document import MappingNode, read_stamp, write_stamp
from asset_migrate.errors import (
    FutureVersion,
    MigrationError,
    MigrationLoopDetected,
    NoUpgradePath,
    TransformFailed,
)
from asset_migrate.utils.logging_utils import get_logger
from asset_migrate.versioning import FormatVersion, VersionLike, coerce_version

from .context import MigrationContext
from .registry import UpgraderRegistry
from .upgrader import Upgrader

LOGGER = get_logger(__name__)


class MigrationState(str, Enum):
    """States of a single document migration."""

    START = "start"
    UPGRADING = "upgrading"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MigrationResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of migrating one document.

    Attributes:
        schema_name: Schema that was migrated.
        file_path: Logical path of the document, if known.
        state: Terminal state, ``DONE`` or ``FAILED``.
        start_version: Version stamped on the document when the run started.
        final_version: Version stamped on the document when the run ended.
        target_version: Version the run was migrating towards.
        applied: Names of the upgraders applied, in order.
        error: The error that aborted the run, ``None`` on success.
        diagnostics: Non-fatal warnings raised by upgraders.
    """

    schema_name: str
    file_path: Optional[str] = None
    state: MigrationState = MigrationState.START
    start_version: Optional[FormatVersion] = None
    final_version: Optional[FormatVersion] = None
    target_version: Optional[FormatVersion] = None
    applied: List[str] = field(default_factory=list)
    error: Optional[MigrationError] = None
    diagnostics: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.state == MigrationState.DONE

    @property
    def upgraded(self) -> bool:
        """True if at least one upgrader was applied successfully."""
        return bool(self.applied)

    def raise_for_failure(self) -> "MigrationResult":
        if self.error is not None:
            raise self.error
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""

        def _text(version: Optional[FormatVersion]) -> Optional[str]:
            return str(version) if version is not None else None

        return {
            "schema_name": self.schema_name,
            "file_path": self.file_path,
            "state": self.state.value,
            "start_version": _text(self.start_version),
            "final_version": _text(self.final_version),
            "target_version": _text(self.target_version),
            "applied": list(self.applied),
            "error": self.error.report() if self.error is not None else None,
            "diagnostics": list(self.diagnostics),
        }


@dataclass
class MigrationJob:
    """One document queued for :meth:`MigrationRunner.migrate_many`."""

    document: MappingNode
    schema_name: str
    file_path: Optional[str] = None
    target_version: Optional[VersionLike] = None


class MigrationRunner:
    """
    Applies registered upgraders to documents.

    The runner holds no per-document state, so one instance may serve many
    threads as long as each document is migrated by a single thread.
    """

    def __init__(
        self,
        registry: UpgraderRegistry,
        settings: Optional[MigrationSettings] = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or MigrationSettings()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        document: MappingNode,
        schema_name: str,
        target_version: Optional[VersionLike] = None,
        file_path: Optional[str] = None,
    ) -> MigrationResult:
        """Migrate ``document`` in place and report the outcome.

        Migration errors are captured in the result instead of raised.
        Registry misconfiguration (``RangeGap`` and friends) still raises,
        since it is a programming error rather than a property of the
        document.
        """
        result = MigrationResult(schema_name=schema_name, file_path=file_path)
        try:
            self._run(document, result, target_version)
            result.state = MigrationState.DONE
        except MigrationError as exc:
            exc.with_identity(
                schema_name=schema_name,
                file_path=file_path,
                stamped_version=result.start_version,
                target_version=result.target_version,
            )
            result.state = MigrationState.FAILED
            result.error = exc
            LOGGER.error("Migration failed: %s", exc.report())
        return result

    def migrate(
        self,
        document: MappingNode,
        schema_name: str,
        target_version: Optional[VersionLike] = None,
        file_path: Optional[str] = None,
    ) -> MigrationResult:
        """Like :meth:`run`, but raise the captured :class:`MigrationError`."""
        return self.run(document, schema_name, target_version, file_path).raise_for_failure()

    def needs_migration(
        self,
        document: MappingNode,
        schema_name: str,
        target_version: Optional[VersionLike] = None,
    ) -> bool:
        """True if ``document`` is stamped below the target version.

        Raises:
            MalformedVersion: If the stamp cannot be parsed.
        """
        target = self._resolve_target(schema_name, target_version)
        if target is None:
            return False
        return self._read_version(document, schema_name) < target

    def migrate_many(
        self, jobs: Iterable[MigrationJob], workers: Optional[int] = None
    ) -> List[MigrationResult]:
        """Migrate independent documents, possibly on several threads.

        Results are returned in the order of ``jobs``.
        """
        jobs = list(jobs)
        workers = workers or self.settings.workers
        if workers <= 1 or len(jobs) <= 1:
            return [self._run_job(job) for job in jobs]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self._run_job, jobs))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_job(self, job: MigrationJob) -> MigrationResult:
        return self.run(job.document, job.schema_name, job.target_version, job.file_path)

    def _resolve_target(
        self, schema_name: str, target_version: Optional[VersionLike]
    ) -> Optional[FormatVersion]:
        if target_version is not None:
            return coerce_version(target_version)
        pinned = self.settings.pinned_target(schema_name)
        if pinned is not None:
            return pinned
        return self.registry.target_version(schema_name)

    def _read_version(self, document: MappingNode, schema_name: str) -> FormatVersion:
        return read_stamp(
            document,
            schema_name,
            default=self.settings.assumed_version(),
            key=self.settings.version_key,
        )

    def _run(
        self,
        document: MappingNode,
        result: MigrationResult,
        target_version: Optional[VersionLike],
    ) -> None:
        schema_name = result.schema_name
        target = self._resolve_target(schema_name, target_version)
        if target is None:
            raise NoUpgradePath(f"Schema '{schema_name}' is not registered")
        result.target_version = target
        self.registry.ensure_valid(schema_name)

        version = self._read_version(document, schema_name)
        result.start_version = version
        result.final_version = version

        if version == target:
            LOGGER.debug(
                "%s already at %s %s", result.file_path or "<memory>", schema_name, version
            )
            return
        if version > target:
            raise FutureVersion(
                f"Document is stamped {version}, newer than the supported "
                f"{schema_name} version {target}; refusing to downgrade"
            )

        context = MigrationContext(
            schema_name=schema_name,
            current_version=version,
            target_version=target,
            file_path=result.file_path,
            diagnostic_log=result.diagnostics,
        )
        result.state = MigrationState.UPGRADING
        limit = len(self.registry.upgraders(schema_name)) + 1
        steps = 0

        while version != target:
            if steps >= limit:
                raise MigrationLoopDetected(
                    f"Still at {version} after {steps} upgrade steps; "
                    f"the {schema_name} upgrader chain does not converge"
                )
            upgrader = self.registry.find_upgrader(schema_name, version)
            if upgrader is None:
                raise NoUpgradePath(
                    f"No {schema_name} upgrader covers version {version}"
                )
            if upgrader.to_version > target:
                raise NoUpgradePath(
                    f"Upgrader {upgrader} would move the document past "
                    f"the target version {target}"
                )

            self._apply(upgrader, document, context)
            version = write_stamp(
                document, schema_name, upgrader.to_version, key=self.settings.version_key
            )
            result.applied.append(upgrader.name)
            result.final_version = version
            steps += 1

        LOGGER.info(
            "Migrated %s from %s %s to %s via %s",
            result.file_path or "<memory>",
            schema_name,
            result.start_version,
            version,
            ", ".join(result.applied),
        )

    def _apply(
        self, upgrader: Upgrader, document: MappingNode, context: MigrationContext
    ) -> None:
        LOGGER.debug("Applying %s to %s", upgrader, context.describe())
        try:
            upgrader.apply(document, context)
        except TransformFailed as exc:
            if exc.upgrader_name is None:
                exc.upgrader_name = upgrader.name
            raise
        except MigrationError:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise TransformFailed(
                f"Upgrader {upgrader.name} raised {type(exc).__name__}: {exc}",
                field_name=getattr(exc, "field_name", None),
                upgrader_name=upgrader.name,
            ) from exc
