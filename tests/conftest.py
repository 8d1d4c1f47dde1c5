"""Shared test fixtures for Typecat."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from typecat import (
    AccessorRegistry,
    BundleAlias,
    CatalogModel,
    LibraryAlias,
    ProjectNode,
    VersionAlias,
    WorkspaceCache,
)
from typecat.build.compiler import BytecodeCompiler
from typecat.core.config import reset_settings
from typecat.core.errors import CompilationError


class CountingCompiler(BytecodeCompiler):
    """BytecodeCompiler that records every invocation, optionally slowly or failing."""

    def __init__(self, delay: float = 0.0, fail: bool = False):
        self.delay = delay
        self.fail = fail
        self.calls: list[list[Path]] = []
        self._lock = threading.Lock()

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self.calls)

    def compile(self, source_files, output_dir, extra_classpath, source_root=None):
        with self._lock:
            self.calls.append(list(source_files))
        if self.delay > 0:
            time.sleep(self.delay)
        if self.fail:
            # Leave something behind so tests can check it never becomes visible.
            output_dir.mkdir(parents=True, exist_ok=True)
            (output_dir / "partial.pyc").write_bytes(b"")
            raise CompilationError("compiler rejected sources", sources={"x.py": "broken"})
        super().compile(source_files, output_dir, extra_classpath, source_root=source_root)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    """Each test sees default settings, unaffected by the environment."""
    for var in ("TYPECAT_CACHE_DIR", "TYPECAT_PROJECTS_EXTENSION_NAME",
                "TYPECAT_PROJECT_ACCESSORS", "TYPECAT_CONCURRENCY"):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def cache_dir(tmp_path):
    """Clean workspace cache root for each test."""
    d = tmp_path / "cache"
    d.mkdir()
    return d


@pytest.fixture
def compiler():
    return CountingCompiler()


@pytest.fixture
def cache(cache_dir, compiler):
    return WorkspaceCache(cache_dir, compiler=compiler)


@pytest.fixture
def make_cache(cache_dir):
    """Factory for caches over the same root with their own CountingCompiler."""

    def _make(**compiler_options) -> WorkspaceCache:
        return WorkspaceCache(cache_dir, compiler=CountingCompiler(**compiler_options))

    return _make


@pytest.fixture
def registry():
    return AccessorRegistry()


@pytest.fixture
def libs_catalog():
    """Catalog 'libs': guava library, testing bundle, guavaVersion version."""
    return CatalogModel(
        name="libs",
        libraries=(LibraryAlias(alias="guava", group="com.google.guava", name="guava", version="31.1"),),
        bundles=(BundleAlias(alias="testing", libraries=("guava",)),),
        versions=(VersionAlias(alias="guavaVersion", version="31.1"),),
    )


@pytest.fixture
def rich_catalog():
    """A catalog with separators, version refs and several bundles."""
    return CatalogModel(
        name="tools",
        libraries=(
            LibraryAlias.parse("junit-jupiter", "org.junit.jupiter:junit-jupiter", version_ref="junit"),
            LibraryAlias.parse("groovy.core", "org.codehaus.groovy:groovy:3.0.5"),
            LibraryAlias.parse("commons-lang3", "org.apache.commons:commons-lang3"),
        ),
        bundles=(
            BundleAlias("groovy", ("groovy.core",)),
            BundleAlias("test-all", ("junit-jupiter", "groovy.core")),
        ),
        versions=(VersionAlias("junit", "5.9.1"),),
    )


@pytest.fixture
def project_tree():
    """root -> app, core-utils -> (io, net)."""
    return ProjectNode.root("demo", "app", ("core-utils", ["io", "net"]))
