"""
Asset descriptors and the catalog that maps asset files to their upgraders.

A format version is stamped per package (``Xenko``), but upgraders belong to
one asset type: two asset types of the same package each have their own
chain of ranges. The catalog therefore keeps one :class:`UpgraderRegistry`
per asset type and finds the right one from a file extension or from the
YAML tag on a document's root.

Usage::

    catalog = build_default_catalog()
    descriptor = catalog.for_path("Assets/Arial.xkfnt")
    runner = catalog.runner_for(descriptor)
    result = runner.run(document, descriptor.schema_name, file_path=path)
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from asset_migrate.config import MigrationSettings
from asset_migrate.document import MappingNode
from asset_migrate.errors import MalformedVersion, RegistryError
from asset_migrate.migration import MigrationRunner, UpgraderRegistry
from asset_migrate.utils.logging_utils import get_logger
from asset_migrate.versioning import FormatVersion

from . import sprite_font

LOGGER = get_logger(__name__)

Installer = Callable[[UpgraderRegistry], None]


class AssetDescriptor(BaseModel):
    """
    Static description of one asset type.

    Examples:
        >>> AssetDescriptor(
        ...     name="Sprite Font",
        ...     tag="!SpriteFont",
        ...     schema_name="Xenko",
        ...     format_version="1.7.0-beta02",
        ...     file_extensions=".xkfnt;.pdxfnt",
        ... ).file_extensions
        ['.xkfnt', '.pdxfnt']
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Display name")
    tag: str = Field(
        ..., pattern=r"^![A-Za-z0-9_.:-]+$", description="YAML tag of the root mapping"
    )
    schema_name: str = Field(
        ..., min_length=1, description="Package whose version is stamped on the asset"
    )
    format_version: str = Field(..., description="Current format version")
    file_extensions: List[str] = Field(
        ..., min_length=1, description="Extensions, given as a list or ';'-separated"
    )

    @field_validator("format_version")
    @classmethod
    def _check_format_version(cls, value: str) -> str:
        try:
            return str(FormatVersion.parse(value))
        except MalformedVersion as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("file_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value):
        if isinstance(value, str):
            value = value.split(";")
        extensions = []
        for item in value:
            item = item.strip().lower()
            if not item:
                continue
            extensions.append(item if item.startswith(".") else f".{item}")
        return extensions

    @property
    def version(self) -> FormatVersion:
        return FormatVersion.parse(self.format_version)


class AssetCatalog:
    """Registry of asset descriptors, each with its own upgrader registry."""

    def __init__(self) -> None:
        self._descriptors: Dict[str, AssetDescriptor] = {}
        self._registries: Dict[str, UpgraderRegistry] = {}
        self._by_extension: Dict[str, AssetDescriptor] = {}

    def add(
        self, descriptor: AssetDescriptor, installer: Optional[Installer] = None
    ) -> UpgraderRegistry:
        """Add ``descriptor`` and let ``installer`` register its upgraders.

        Raises:
            RegistryError: If the tag or one of the extensions is taken.
        """
        if descriptor.tag in self._descriptors:
            raise RegistryError(f"Asset tag {descriptor.tag} is already registered")
        for extension in descriptor.file_extensions:
            if extension in self._by_extension:
                raise RegistryError(
                    f"Extension {extension} already belongs to "
                    f"{self._by_extension[extension].name}"
                )

        registry = UpgraderRegistry()
        if installer is not None:
            installer(registry)
        registry.declare_format_version(descriptor.schema_name, descriptor.version)

        self._descriptors[descriptor.tag] = descriptor
        self._registries[descriptor.tag] = registry
        for extension in descriptor.file_extensions:
            self._by_extension[extension] = descriptor
        LOGGER.debug(
            "Cataloged %s (%s) at %s %s",
            descriptor.name,
            descriptor.tag,
            descriptor.schema_name,
            descriptor.format_version,
        )
        return registry

    def freeze(self) -> None:
        """Freeze every registry, surfacing any range gap now."""
        for registry in self._registries.values():
            registry.freeze()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def for_tag(self, tag: Optional[str]) -> Optional[AssetDescriptor]:
        return self._descriptors.get(tag) if tag else None

    def for_path(self, path: Union[str, Path]) -> Optional[AssetDescriptor]:
        return self._by_extension.get(Path(path).suffix.lower())

    def for_document(self, document: MappingNode) -> Optional[AssetDescriptor]:
        return self.for_tag(document.tag)

    def registry_for(self, descriptor: AssetDescriptor) -> UpgraderRegistry:
        return self._registries[descriptor.tag]

    def runner_for(
        self, descriptor: AssetDescriptor, settings: Optional[MigrationSettings] = None
    ) -> MigrationRunner:
        return MigrationRunner(self.registry_for(descriptor), settings)

    def descriptors(self) -> List[AssetDescriptor]:
        return list(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)


SPRITE_FONT_ASSET = AssetDescriptor(
    name="Sprite Font",
    tag=sprite_font.SPRITE_FONT_TAG,
    schema_name=sprite_font.PACKAGE_NAME,
    format_version=sprite_font.FORMAT_VERSION,
    file_extensions=sprite_font.FILE_EXTENSION,
)


def build_default_catalog() -> AssetCatalog:
    """Catalog of the built-in asset types, frozen and ready for lookups."""
    catalog = AssetCatalog()
    catalog.add(SPRITE_FONT_ASSET, sprite_font.register_sprite_font)
    catalog.freeze()
    return catalog
