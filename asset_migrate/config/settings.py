"""
Migration settings schema.

Pydantic model for the knobs an asset-loading host can tune without code
changes: where the version stamp lives, what an unstamped document is
assumed to be, per-schema target pins, and batch behaviour.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from asset_migrate.document.stamp import DEFAULT_VERSION_KEY
from asset_migrate.errors import MalformedVersion
from asset_migrate.versioning import FormatVersion


class MigrationSettings(BaseModel):
    """
    Settings consumed by the migration runner and the CLI.

    Examples:
        >>> settings = MigrationSettings(target_versions={"Xenko": "1.5.0-alpha09"})
        >>> settings.pinned_target("Xenko")
        FormatVersion(major=1, minor=5, patch=0, prerelease_label='alpha', prerelease_number=9)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    version_key: str = Field(
        DEFAULT_VERSION_KEY,
        description="Root field holding the per-schema version stamps",
        min_length=1,
    )

    default_version: str = Field(
        str(FormatVersion.ZERO),
        description="Version assumed for documents without a stamp",
    )

    target_versions: Dict[str, str] = Field(
        default_factory=dict,
        description="Schema name -> version to migrate to instead of the "
        "schema's current format version",
    )

    workers: int = Field(
        1, ge=1, le=64, description="Worker threads for batch migration"
    )

    write_back: bool = Field(
        False, description="Persist migrated documents over their source files"
    )

    @field_validator("default_version")
    @classmethod
    def _check_default_version(cls, value: str) -> str:
        return str(_parse(value))

    @field_validator("target_versions")
    @classmethod
    def _check_target_versions(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {schema: str(_parse(version)) for schema, version in value.items()}

    def assumed_version(self) -> FormatVersion:
        return FormatVersion.parse(self.default_version)

    def pinned_target(self, schema_name: str):
        """Pinned target for ``schema_name`` or ``None``."""
        version = self.target_versions.get(schema_name)
        return FormatVersion.parse(version) if version is not None else None


def _parse(value: str) -> FormatVersion:
    try:
        return FormatVersion.parse(value)
    except MalformedVersion as exc:
        # pydantic turns ValueError into a ValidationError entry
        raise ValueError(str(exc)) from exc
