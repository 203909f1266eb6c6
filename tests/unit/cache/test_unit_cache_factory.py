# tests/unit/cache/test_unit_cache_factory.py - v4
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

from pathlib import Path

from conftest import FakeRenderer

from md_serve.cache.cache_factory import create_render_cache
from md_serve.cache.render_cache import RenderCache
from md_serve.config.settings import Settings
from md_serve.rendering.pandoc_renderer import PandocRenderer


class TestCreateRenderCache:
    def test_defaults(self):
        cache = create_render_cache()
        assert isinstance(cache, RenderCache)
        assert cache.directory == Path("html_cache")
        assert isinstance(cache.renderer, PandocRenderer)

    def test_from_settings(self, tmp_path: Path):
        s = Settings(
            _env_file=None,
            html_cache_path=tmp_path / "out",
            artifact_extension="htm",
            renderer_executable="/opt/pandoc/bin/pandoc",
        )
        cache = create_render_cache(s)
        assert cache.directory == tmp_path / "out"
        assert cache.artifact_path(Path("notes.md")) == tmp_path / "out" / "notes.htm"
        assert cache.renderer.executable == "/opt/pandoc/bin/pandoc"

    def test_renderer_override(self, settings: Settings):
        renderer = FakeRenderer()
        cache = create_render_cache(settings, renderer=renderer)
        assert cache.renderer is renderer

    def test_does_not_create_directory(self, settings: Settings):
        create_render_cache(settings, renderer=FakeRenderer())
        assert not settings.html_cache_path.exists()
