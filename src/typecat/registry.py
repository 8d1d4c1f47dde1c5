"""Accessor registry — merged classpath of a run and lazy, once-only class resolution."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from typecat.build.classloader import ClassLoader, ExportedClassLoader
from typecat.build.generators import ROOT_PROJECT_ACCESSOR_CLASSNAME, catalog_class_name
from typecat.build.workspace import GeneratedAccessors
from typecat.core.errors import ModelError
from typecat.core.locks import KeyedLock
from typecat.core.models import CatalogModel, GeneratedArtifactSet
from typecat.runtime import ACCESSORS_PACKAGE

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class AccessorFactory:
    """Creates accessor instances of one loaded generated class."""

    logical_name: str
    accessor_class: type
    class_loader: ClassLoader

    def create(self):
        return self.accessor_class(self.class_loader)


class AccessorRegistry:
    """Binds logical names (catalog names, the projects extension) to generated classes.

    Each logical name is resolved at most once: the first caller loads the
    class under a lock scoped to that name, later callers get the memoized
    factory, or the memoized miss. A registry serves one set of generated
    classes: re-binding a resolved name to a different model, or exporting a
    class name from a second workspace, raises ModelError.
    """

    def __init__(self, class_loader: ClassLoader | None = None, projects_extension_name: str = "projects"):
        self.class_loader = class_loader or ExportedClassLoader()
        self.projects_extension_name = projects_extension_name
        self._catalogs: dict[str, CatalogModel] = {}
        self._projects_enabled = False
        self._artifacts = GeneratedArtifactSet()
        self._factories: dict[str, AccessorFactory | None] = {}
        self._views: dict[str, object] = {}
        self._class_owners: dict[str, str] = {}  # qualified class name -> workspace identity
        self._name_locks = KeyedLock()
        self._guard = threading.Lock()

    # -- Binding --

    def bind(self, catalogs: list[CatalogModel], projects_enabled: bool) -> None:
        """Record the models of the current run."""
        bound: dict[str, CatalogModel] = {}
        for model in catalogs:
            if model.name == self.projects_extension_name:
                raise ModelError(
                    f"catalog '{model.name}' clashes with the projects extension name"
                )
            if model.name in bound:
                raise ModelError(f"catalog '{model.name}' is declared more than once")
            bound[model.name] = model
        with self._guard:
            for name, factory in self._factories.items():
                if factory is None or name not in self._catalogs:
                    continue
                if bound.get(name) != self._catalogs[name]:
                    raise ModelError(
                        f"catalog '{name}' was already resolved and cannot be re-bound "
                        f"to a different model; use a new registry"
                    )
            self._catalogs = bound
            self._projects_enabled = projects_enabled
            self._forget_misses()

    def export(self, accessors: GeneratedAccessors) -> None:
        """Merge a workspace into the classpath and make its classes loadable.

        Raises:
            ModelError: A class of the workspace was already exported by a
                workspace with a different identity.
        """
        with self._guard:
            for class_name in accessors.class_names:
                owner = self._class_owners.get(class_name)
                if owner is not None and owner != accessors.identity:
                    raise ModelError(
                        f"{class_name} is already exported from workspace {owner[:12]}, "
                        f"cannot export it again from {accessors.identity[:12]}; use a new registry"
                    )
            for class_name in accessors.class_names:
                self._class_owners[class_name] = accessors.identity
        self.class_loader.export(accessors.classes_dir)
        with self._guard:
            self._artifacts = self._artifacts.plus(accessors)
            self._forget_misses()

    def _forget_misses(self) -> None:
        # A miss may turn into a hit once more models or classes are known.
        self._factories = {k: v for k, v in self._factories.items() if v is not None}

    @property
    def artifacts(self) -> GeneratedArtifactSet:
        with self._guard:
            return self._artifacts

    @property
    def sources(self) -> tuple:
        return self.artifacts.sources

    @property
    def classes(self) -> tuple:
        return self.artifacts.classes

    # -- Resolution --

    def _class_name_for(self, logical_name: str) -> str | None:
        with self._guard:
            model = self._catalogs.get(logical_name)
            if model is not None:
                if model.is_empty():
                    return None
                return f"{ACCESSORS_PACKAGE}.{catalog_class_name(model.name)}"
            if self._projects_enabled and logical_name == self.projects_extension_name:
                return f"{ACCESSORS_PACKAGE}.{ROOT_PROJECT_ACCESSOR_CLASSNAME}"
        return None

    def resolve(self, logical_name: str) -> AccessorFactory | None:
        """Factory for a logical name, or None when nothing was generated for it."""
        with self._guard:
            cached = self._factories.get(logical_name, _MISSING)
        if cached is not _MISSING:
            return cached

        with self._name_locks.hold(logical_name):
            with self._guard:
                cached = self._factories.get(logical_name, _MISSING)
            if cached is not _MISSING:
                return cached

            factory = None
            class_name = self._class_name_for(logical_name)
            if class_name is not None:
                cls = self.class_loader.load_class(class_name)
                if cls is not None:
                    factory = AccessorFactory(logical_name, cls, self.class_loader)
                    logger.debug("bound %s to %s", logical_name, class_name)
            with self._guard:
                self._factories[logical_name] = factory
            return factory

    def list_catalogs(self) -> list:
        """Catalog views for every resolvable catalog, ordered by name."""
        with self._guard:
            names = sorted(self._catalogs)
        views = []
        for name in names:
            view = self.find_catalog(name)
            if view is not None:
                views.append(view)
        return views

    def find_catalog(self, name: str):
        """The catalog view bound to ``name``, or None."""
        with self._guard:
            if name not in self._catalogs:
                return None
            view = self._views.get(name)
        if view is not None:
            return view
        factory = self.resolve(name)
        if factory is None:
            return None
        with self._guard:
            return self._views.setdefault(name, factory.create())

    def projects(self):
        """The root project accessor, or None when project accessors were not generated."""
        factory = self.resolve(self.projects_extension_name)
        return factory.create() if factory is not None else None
