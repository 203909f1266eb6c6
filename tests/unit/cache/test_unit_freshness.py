# tests/unit/cache/test_unit_freshness.py - v1
"""Tests for cache/freshness.py and cache/models.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from md_serve.cache.freshness import artifact_path_for, stat_pair
from md_serve.cache.models import ArtifactStat, RenderOutcome
from md_serve.core.errors import DocumentNotFoundError


def _stat(document: int, artifact: int | None) -> ArtifactStat:
    return ArtifactStat(
        document_path=Path("notes.md"),
        artifact_path=Path("cache/notes.html"),
        document_mtime_ns=document,
        artifact_mtime_ns=artifact,
    )


class TestArtifactPathFor:
    def test_uses_stem_and_extension(self):
        path = artifact_path_for(Path("docs/notes.md"), Path("cache"))
        assert path == Path("cache/notes.html")

    def test_custom_extension(self):
        path = artifact_path_for(Path("notes.md"), Path("cache"), extension="htm")
        assert path == Path("cache/notes.htm")

    def test_same_stem_in_different_dirs_collides(self):
        a = artifact_path_for(Path("a/readme.md"), Path("cache"))
        b = artifact_path_for(Path("b/readme.md"), Path("cache"))
        assert a == b


class TestIsStale:
    def test_missing_artifact_is_stale(self):
        assert _stat(100, None).is_stale is True

    def test_older_artifact_is_stale(self):
        assert _stat(100, 99).is_stale is True

    def test_equal_mtime_is_fresh(self):
        assert _stat(100, 100).is_stale is False

    def test_newer_artifact_is_fresh(self):
        assert _stat(100, 200).is_stale is False


class TestStatPair:
    @pytest.mark.asyncio
    async def test_missing_artifact(self, tmp_path: Path):
        doc = tmp_path / "notes.md"
        doc.write_text("x")
        stat = await stat_pair(doc, tmp_path / "notes.html")
        assert stat.artifact_mtime_ns is None
        assert stat.document_mtime_ns == doc.stat().st_mtime_ns
        assert stat.is_stale

    @pytest.mark.asyncio
    async def test_both_present(self, tmp_path: Path):
        doc = tmp_path / "notes.md"
        doc.write_text("x")
        artifact = tmp_path / "notes.html"
        artifact.write_text("<p>x</p>")
        stat = await stat_pair(doc, artifact)
        assert stat.artifact_mtime_ns == artifact.stat().st_mtime_ns

    @pytest.mark.asyncio
    async def test_missing_document(self, tmp_path: Path):
        with pytest.raises(DocumentNotFoundError):
            await stat_pair(tmp_path / "gone.md", tmp_path / "gone.html")


class TestRenderOutcome:
    def test_shared_defaults_false(self):
        outcome = RenderOutcome(
            status="fresh",
            document_path=Path("notes.md"),
            artifact_path=Path("cache/notes.html"),
        )
        assert outcome.shared is False

    def test_rejects_unknown_status(self):
        with pytest.raises(ValueError):
            RenderOutcome(
                status="failed",
                document_path=Path("notes.md"),
                artifact_path=Path("cache/notes.html"),
            )
