"""Typecat - cached, type-safe accessors for dependency catalogs and project trees.

Usage:
    from typecat import AccessorRegistry, CatalogModel, LibraryAlias, ProjectNode, WorkspaceCache
    from typecat import generate_accessors

    libs = CatalogModel("libs", libraries=(LibraryAlias.parse("guava", "com.google.guava:guava:31.1"),))
    registry = AccessorRegistry()
    generate_accessors([libs], ProjectNode.root("demo", "app"),
                       cache=WorkspaceCache(".typecat/accessors"), registry=registry)
    registry.find_catalog("libs").guava
    registry.projects().app
"""

from typecat.build.fingerprint import AccessorClasspath, Fingerprint, identify
from typecat.build.runner import RequestStats, RunResult, generate_accessors
from typecat.build.workspace import GeneratedAccessors, WorkspaceCache
from typecat.core.errors import (
    AccessorValidationError,
    CompilationError,
    GenerationError,
    ModelError,
    TypecatError,
)
from typecat.core.models import (
    BundleAlias,
    CatalogModel,
    CatalogRequest,
    GeneratedArtifactSet,
    LibraryAlias,
    ProjectNode,
    ProjectTreeRequest,
    VersionAlias,
)
from typecat.registry import AccessorFactory, AccessorRegistry

__all__ = [
    "AccessorClasspath",
    "AccessorFactory",
    "AccessorRegistry",
    "AccessorValidationError",
    "BundleAlias",
    "CatalogModel",
    "CatalogRequest",
    "CompilationError",
    "Fingerprint",
    "GeneratedAccessors",
    "GeneratedArtifactSet",
    "GenerationError",
    "LibraryAlias",
    "ModelError",
    "ProjectNode",
    "ProjectTreeRequest",
    "RequestStats",
    "RunResult",
    "TypecatError",
    "VersionAlias",
    "WorkspaceCache",
    "generate_accessors",
    "identify",
]

__version__ = "0.1.0"
