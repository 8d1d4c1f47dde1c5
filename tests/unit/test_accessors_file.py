"""Tests for loading accessors files."""

from __future__ import annotations

import pytest

from typecat.build.accessors_file import load_accessors_file, validate_accessors_file
from typecat.core.models import CatalogModel

ACCESSORS = """
from typecat import CatalogModel, LibraryAlias, ProjectNode

catalogs = [
    CatalogModel("libs", libraries=(LibraryAlias.parse("guava", "com.google.guava:guava:31.1"),)),
]
root_project = ProjectNode.root("demo", "app")
"""


class TestLoadAccessorsFile:
    def test_loads_catalogs_and_tree(self, tmp_path):
        path = tmp_path / "accessors.py"
        path.write_text(ACCESSORS)
        loaded = load_accessors_file(str(path))
        assert loaded.path == path.resolve()
        assert [c.name for c in loaded.catalogs] == ["libs"]
        assert [c.name for c in loaded.root_project.children] == ["app"]

    def test_catalogs_only(self, tmp_path):
        path = tmp_path / "accessors.py"
        path.write_text("from typecat import CatalogModel\ncatalogs = [CatalogModel('libs')]\n")
        loaded = load_accessors_file(str(path))
        assert loaded.root_project is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_accessors_file(str(tmp_path / "nope.py"))

    def test_requires_declarations(self, tmp_path):
        path = tmp_path / "accessors.py"
        path.write_text("x = 1\n")
        with pytest.raises(ValueError, match="must define"):
            load_accessors_file(str(path))

    def test_rejects_wrong_types(self, tmp_path):
        path = tmp_path / "accessors.py"
        path.write_text("catalogs = ['libs']\n")
        with pytest.raises(TypeError, match="CatalogModel"):
            load_accessors_file(str(path))

        path.write_text("root_project = 'demo'\n")
        with pytest.raises(TypeError, match="ProjectNode"):
            load_accessors_file(str(path))

    def test_model_errors_surface(self, tmp_path):
        path = tmp_path / "accessors.py"
        path.write_text("from typecat import CatalogModel\ncatalogs = [CatalogModel('Bad')]\n")
        with pytest.raises(ValueError, match="naming convention"):
            load_accessors_file(str(path))


def test_duplicate_catalog_names_rejected():
    with pytest.raises(ValueError, match="more than once"):
        validate_accessors_file([CatalogModel("libs"), CatalogModel("libs")])
