# tests/conftest.py - v2
"""Shared test fixtures for all unit and integration tests.

Provides a fake renderer, a document root with sample documents, a cache
directory and matching Settings. No external tools are required.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

import pytest

from md_serve.cache.render_cache import RenderCache
from md_serve.config.settings import Settings
from md_serve.rendering.base_renderer import BaseRenderer


class FakeRenderer(BaseRenderer):
    """Records calls and writes a small HTML page instead of running pandoc."""

    def __init__(
        self,
        delay: float = 0.0,
        fail_with: Exception | None = None,
        write: bool = True,
    ) -> None:
        self.delay = delay
        self.fail_with = fail_with
        self.write = write
        self.calls: list[tuple[Path, Path]] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def render(self, document_path: Path, artifact_path: Path) -> None:
        self.calls.append((document_path, artifact_path))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        if self.write:
            body = document_path.read_text(encoding="utf-8")
            artifact_path.write_text(
                f"<html><head><title>{document_path.stem}</title></head>"
                f"<body>{body} (render {self.call_count})</body></html>",
                encoding="utf-8",
            )


def make_stale(artifact: Path, document: Path, seconds: int = 10) -> None:
    """Backdate ``artifact`` so it is ``seconds`` older than ``document``."""
    target = document.stat().st_mtime_ns - seconds * 1_000_000_000
    os.utime(artifact, ns=(target, target))


# === FIXTURES ===


@pytest.fixture(autouse=True)
def _reset_md_serve_logging():
    """Drop handlers installed by setup_logging() so they never outlive a test."""
    yield
    root = logging.getLogger("md_serve")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.propagate = True


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Document root holding notes.md, logo.png and a matching logo.md."""
    root = tmp_path / "docs"
    root.mkdir()
    (root / "notes.md").write_text("# Notes\n\nSome *notes*.\n", encoding="utf-8")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    (root / "logo.md").write_text("# Not the logo\n", encoding="utf-8")
    (root / "guides").mkdir()
    (root / "guides" / "setup.md").write_text("# Setup\n", encoding="utf-8")
    return root


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Cache directory path; deliberately not created."""
    return tmp_path / "cache" / "html_cache"


@pytest.fixture
def render_cache(cache_dir: Path, fake_renderer: FakeRenderer) -> RenderCache:
    return RenderCache(cache_dir=cache_dir, renderer=fake_renderer)


@pytest.fixture
def settings(docs_dir: Path, cache_dir: Path) -> Settings:
    return Settings(_env_file=None, document_root=docs_dir, html_cache_path=cache_dir)
