# tests/integration/cli/test_int_main.py - v1
"""Integration tests for the md-serve CLI (render, stats, errors)."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeRenderer

from md_serve.main import main
from md_serve.rendering import renderer_factory


@pytest.fixture
def fake_backend(monkeypatch) -> FakeRenderer:
    renderer = FakeRenderer()
    monkeypatch.setitem(renderer_factory._RENDERER_REGISTRY, "fake", lambda executable: renderer)
    monkeypatch.setenv("RENDERER_BACKEND", "fake")
    return renderer


class TestCli:

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "md-serve" in capsys.readouterr().out

    def test_invalid_port(self, capsys):
        assert main(["serve", "--port", "99999"]) == 2
        assert "LISTENING_PORT" in capsys.readouterr().err

    def test_render_then_fresh(self, fake_backend, docs_dir: Path, cache_dir: Path, capsys):
        doc = str(docs_dir / "notes.md")
        assert main(["render", doc, "--cache-dir", str(cache_dir)]) == 0
        assert main(["render", doc, "--cache-dir", str(cache_dir)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == f"rendered: {cache_dir / 'notes.html'}"
        assert out[1] == f"fresh: {cache_dir / 'notes.html'}"
        assert fake_backend.call_count == 1

    def test_render_missing_document(self, fake_backend, tmp_path: Path):
        assert main(["render", str(tmp_path / "missing.md"), "--cache-dir", str(tmp_path)]) == 1
        assert fake_backend.call_count == 0

    def test_stats(self, fake_backend, docs_dir: Path, cache_dir: Path, capsys):
        main(["render", str(docs_dir / "notes.md"), "--cache-dir", str(cache_dir)])
        capsys.readouterr()
        assert main(["stats", "--cache-dir", str(cache_dir)]) == 0
        out = capsys.readouterr().out
        assert "Artifacts:  1" in out
