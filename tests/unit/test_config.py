"""Tests for settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from typecat.core.config import Settings, get_settings, reset_settings, settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.cache_dir == Path(".typecat/accessors")
        assert s.projects_extension_name == "projects"
        assert s.project_accessors is True
        assert s.concurrency == 1
        assert s.logs_dir == Path(".typecat/accessors/logs")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TYPECAT_CACHE_DIR", str(tmp_path / "c"))
        monkeypatch.setenv("TYPECAT_PROJECT_ACCESSORS", "false")
        monkeypatch.setenv("TYPECAT_CONCURRENCY", "4")
        s = Settings()
        assert s.cache_dir == tmp_path / "c"
        assert s.project_accessors is False
        assert s.concurrency == 4

    def test_concurrency_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("TYPECAT_CONCURRENCY", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_ensure_cache_dir(self, tmp_path):
        s = Settings(cache_dir=tmp_path / "a" / "b")
        s.ensure_cache_dir()
        assert (tmp_path / "a" / "b").is_dir()


class TestCachedSettings:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_picks_up_environment(self, monkeypatch):
        assert get_settings().projects_extension_name == "projects"
        monkeypatch.setenv("TYPECAT_PROJECTS_EXTENSION_NAME", "modules")
        reset_settings()
        assert get_settings().projects_extension_name == "modules"
        assert settings.projects_extension_name == "modules"
