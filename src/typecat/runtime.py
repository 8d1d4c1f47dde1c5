"""Base classes that generated accessors extend.

Generated modules import this module, so any change here changes the
generator classpath fingerprint and invalidates cached workspaces.
"""

from __future__ import annotations

from dataclasses import dataclass

from typecat.core.errors import AccessorError
from typecat.core.naming import to_symbol

ACCESSORS_PACKAGE = "typecat_accessors"


@dataclass(frozen=True)
class LibraryCoordinates:
    """group:name:version of a catalog library."""

    group: str
    name: str
    version: str = ""

    @property
    def module(self) -> str:
        return f"{self.group}:{self.name}"

    def __str__(self) -> str:
        if self.version:
            return f"{self.group}:{self.name}:{self.version}"
        return self.module


class TypeSafeCatalogAccessor:
    """A catalog view: typed properties on subclasses, lookup by name here.

    Subclasses fill in ``CATALOG_NAME`` and the three tables. Lookups accept
    the raw alias (``groovy-core``) or any spelling with the same accessor
    name (``groovy.core``, ``groovyCore``).
    """

    CATALOG_NAME = ""
    LIBRARIES: dict[str, tuple[str, str, str]] = {}
    BUNDLES: dict[str, tuple[str, ...]] = {}
    VERSIONS: dict[str, str] = {}

    def __init__(self, class_loader=None):
        self._class_loader = class_loader

    @property
    def catalog_name(self) -> str:
        return self.CATALOG_NAME

    @property
    def library_aliases(self) -> list[str]:
        return sorted(self.LIBRARIES)

    @property
    def bundle_aliases(self) -> list[str]:
        return sorted(self.BUNDLES)

    @property
    def version_aliases(self) -> list[str]:
        return sorted(self.VERSIONS)

    def find_library(self, alias: str) -> LibraryCoordinates | None:
        key = _lookup_key(self.LIBRARIES, alias)
        if key is None:
            return None
        return LibraryCoordinates(*self.LIBRARIES[key])

    def find_bundle(self, alias: str) -> list[LibraryCoordinates] | None:
        key = _lookup_key(self.BUNDLES, alias)
        if key is None:
            return None
        return [LibraryCoordinates(*self.LIBRARIES[lib]) for lib in self.BUNDLES[key]]

    def find_version(self, alias: str) -> str | None:
        key = _lookup_key(self.VERSIONS, alias)
        if key is None:
            return None
        return self.VERSIONS[key]

    def _library(self, alias: str) -> LibraryCoordinates:
        return LibraryCoordinates(*self.LIBRARIES[alias])

    def __repr__(self) -> str:
        return f"<{type(self).__name__} catalog={self.CATALOG_NAME!r}>"


class CatalogSection:
    """Nested accessor group (``libs.bundles``, ``libs.versions``)."""

    def __init__(self, catalog: TypeSafeCatalogAccessor):
        self._catalog = catalog


def _lookup_key(table: dict, alias: str) -> str | None:
    if alias in table:
        return alias
    symbol = to_symbol(alias)
    for key in table:
        if to_symbol(key) == symbol:
            return key
    return None


class _ProjectAccessorBase:
    def __init__(self, class_loader):
        self._class_loader = class_loader

    def _load(self, class_name: str) -> type:
        qualified_name = f"{ACCESSORS_PACKAGE}.{class_name}"
        if self._class_loader is None:
            raise AccessorError(f"No class loader to resolve {qualified_name}")
        cls = self._class_loader.load_class(qualified_name)
        if cls is None:
            raise AccessorError(f"Generated class {qualified_name} not found")
        return cls


class TypeSafeProjectDependency(_ProjectAccessorBase):
    """A project reachable through accessors; children are properties on subclasses."""

    def __init__(self, class_loader, path: str):
        super().__init__(class_loader)
        self._path = path

    @property
    def project_path(self) -> str:
        return self._path

    def _child(self, class_name: str, path: str) -> TypeSafeProjectDependency:
        return self._load(class_name)(self._class_loader, path)

    def __eq__(self, other):
        if not isinstance(other, TypeSafeProjectDependency):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __str__(self) -> str:
        return f"project('{self._path}')"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._path}>"


class TypeSafeProjectDependencyFactory(_ProjectAccessorBase):
    """Entry point of the project accessors (the ``projects`` extension)."""

    ROOT_CLASS = "RootProjectDependency"

    @property
    def root_project(self) -> TypeSafeProjectDependency:
        return self._project(self.ROOT_CLASS, ":")

    def _project(self, class_name: str, path: str) -> TypeSafeProjectDependency:
        return self._load(class_name)(self._class_loader, path)
