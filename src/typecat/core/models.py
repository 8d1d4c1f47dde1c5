"""Core data models for Typecat."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from typecat.core.errors import ModelError
from typecat.core.naming import is_reserved, to_symbol

CATALOG_NAME_PATTERN = re.compile(r"[a-z][a-zA-Z0-9]*")
ALIAS_PATTERN = re.compile(r"[a-z][a-zA-Z0-9_.\-]*")
RESERVED_LIBRARY_ALIASES = frozenset({"bundles", "versions"})


@dataclass(frozen=True)
class LibraryAlias:
    """A dependency alias bound to group:name coordinates."""

    alias: str
    group: str
    name: str
    version: str = ""
    version_ref: str | None = None

    @classmethod
    def parse(cls, alias: str, notation: str, version_ref: str | None = None) -> LibraryAlias:
        """Build from ``group:name[:version]`` notation."""
        parts = notation.split(":")
        if len(parts) not in (2, 3) or not all(parts):
            raise ModelError(f"library '{alias}' has invalid notation '{notation}'")
        version = parts[2] if len(parts) == 3 else ""
        return cls(alias=alias, group=parts[0], name=parts[1], version=version, version_ref=version_ref)

    @property
    def module(self) -> str:
        return f"{self.group}:{self.name}"


@dataclass(frozen=True)
class BundleAlias:
    """A named group of library aliases."""

    alias: str
    libraries: tuple[str, ...] = ()


@dataclass(frozen=True)
class VersionAlias:
    """A named version string."""

    alias: str
    version: str


@dataclass(frozen=True)
class CatalogModel:
    """An immutable, already-built dependency catalog.

    Alias collections are stored sorted by alias so that two models built
    from the same declarations in a different order compare equal.
    """

    name: str
    libraries: tuple[LibraryAlias, ...] = ()
    bundles: tuple[BundleAlias, ...] = ()
    versions: tuple[VersionAlias, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "libraries", tuple(sorted(self.libraries, key=lambda a: a.alias)))
        object.__setattr__(self, "bundles", tuple(sorted(self.bundles, key=lambda a: a.alias)))
        object.__setattr__(self, "versions", tuple(sorted(self.versions, key=lambda a: a.alias)))
        self._validate()

    def _validate(self) -> None:
        if not CATALOG_NAME_PATTERN.fullmatch(self.name):
            raise ModelError(
                f"catalog name '{self.name}' doesn't follow the naming convention: "
                f"{CATALOG_NAME_PATTERN.pattern}"
            )
        for kind, aliases in (
            ("library", [a.alias for a in self.libraries]),
            ("bundle", [a.alias for a in self.bundles]),
            ("version", [a.alias for a in self.versions]),
        ):
            _check_aliases(self.name, kind, aliases)

        for lib in self.libraries:
            if to_symbol(lib.alias) in RESERVED_LIBRARY_ALIASES:
                raise ModelError(f"catalog '{self.name}': library alias '{lib.alias}' is reserved")
            if lib.version_ref is not None and self.find_version(lib.version_ref) is None:
                raise ModelError(
                    f"catalog '{self.name}': library '{lib.alias}' references "
                    f"undefined version '{lib.version_ref}'"
                )

        library_names = {lib.alias for lib in self.libraries}
        for bundle in self.bundles:
            missing = [a for a in bundle.libraries if a not in library_names]
            if missing:
                raise ModelError(
                    f"catalog '{self.name}': bundle '{bundle.alias}' references "
                    f"undefined libraries {missing}"
                )

    def is_empty(self) -> bool:
        return not (self.libraries or self.bundles or self.versions)

    def find_version(self, alias: str) -> VersionAlias | None:
        for version in self.versions:
            if version.alias == alias:
                return version
        return None

    def resolved_version(self, library: LibraryAlias) -> str:
        """The library's version, following its version reference if it has one."""
        if library.version_ref is not None:
            ref = self.find_version(library.version_ref)
            if ref is not None:
                return ref.version
        return library.version


def _check_aliases(catalog: str, kind: str, aliases: list[str]) -> None:
    seen: dict[str, str] = {}
    for alias in aliases:
        if not ALIAS_PATTERN.fullmatch(alias):
            raise ModelError(
                f"catalog '{catalog}': {kind} alias '{alias}' doesn't follow the naming "
                f"convention: {ALIAS_PATTERN.pattern}"
            )
        symbol = to_symbol(alias)
        if is_reserved(symbol):
            raise ModelError(f"catalog '{catalog}': {kind} alias '{alias}' maps to reserved name '{symbol}'")
        if symbol in seen:
            raise ModelError(
                f"catalog '{catalog}': {kind} aliases '{seen[symbol]}' and '{alias}' "
                f"map to the same accessor name {symbol}"
            )
        seen[symbol] = alias


@dataclass(frozen=True)
class ProjectNode:
    """A node in the project tree.

    ``path`` is ``:`` for the root and ``:a:b`` for nested projects.
    """

    name: str
    path: str = ":"
    children: tuple[ProjectNode, ...] = ()

    def __post_init__(self):
        names = [child.name for child in self.children]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ModelError(f"project {self.path} has duplicate subprojects {duplicates}")
        for child in self.children:
            # Identities hash paths only, so a path must determine its name.
            expected = self.child_path(child.name)
            if ":" in child.name or child.path != expected:
                raise ModelError(
                    f"subproject '{child.name}' of project {self.path} has path "
                    f"{child.path}, expected {expected}"
                )

    def child_path(self, name: str) -> str:
        return f":{name}" if self.path == ":" else f"{self.path}:{name}"

    @classmethod
    def root(cls, name: str, *children: str | tuple) -> ProjectNode:
        """Build a tree from nested specs: ``ProjectNode.root("r", "app", ("lib", ["core"]))``.

        A spec is either a child name or a ``(name, [child specs])`` pair.
        """
        return cls._build(name, ":", children)

    @classmethod
    def _build(cls, name: str, path: str, specs) -> ProjectNode:
        nodes = []
        for spec in specs:
            if isinstance(spec, str):
                child_name, grandchildren = spec, ()
            else:
                child_name, grandchildren = spec
            child_path = f":{child_name}" if path == ":" else f"{path}:{child_name}"
            nodes.append(cls._build(child_name, child_path, grandchildren))
        return cls(name=name, path=path, children=tuple(nodes))

    @property
    def is_root(self) -> bool:
        return self.path == ":"

    @property
    def path_segments(self) -> list[str]:
        return [s for s in self.path.split(":") if s]

    def all_projects(self) -> list[ProjectNode]:
        """This node and every descendant, depth-first pre-order."""
        result = [self]
        for child in self.children:
            result.extend(child.all_projects())
        return result


@dataclass(frozen=True)
class CatalogRequest:
    """Generate accessors for one catalog."""

    model: CatalogModel

    @property
    def display_name(self) -> str:
        return f"generation of dependency accessors for {self.model.name}"


@dataclass(frozen=True)
class ProjectTreeRequest:
    """Generate accessors for a whole project tree."""

    root: ProjectNode

    @property
    def display_name(self) -> str:
        return "generation of project accessors"


GenerationRequest = CatalogRequest | ProjectTreeRequest


@dataclass(frozen=True)
class GeneratedArtifactSet:
    """Source and class directories accumulated over a run."""

    sources: tuple[Path, ...] = ()
    classes: tuple[Path, ...] = ()

    def plus(self, accessors) -> GeneratedArtifactSet:
        """A new set with the accessors' directories appended (no duplicates)."""
        sources = self.sources if accessors.sources_dir in self.sources else self.sources + (accessors.sources_dir,)
        classes = self.classes if accessors.classes_dir in self.classes else self.classes + (accessors.classes_dir,)
        return GeneratedArtifactSet(sources=sources, classes=classes)

    def is_empty(self) -> bool:
        return not self.classes
