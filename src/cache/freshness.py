# src/cache/freshness.py - v1
"""Artifact path derivation and timestamp-based freshness checks."""

from __future__ import annotations

import asyncio
from pathlib import Path

from md_serve.cache.models import ArtifactStat
from md_serve.core.errors import CacheIOError, DocumentNotFoundError


def artifact_path_for(document_path: Path, cache_dir: Path, extension: str = "html") -> Path:
    """Map a document to its artifact: ``<cache_dir>/<stem>.<extension>``.

    Documents sharing a stem in different directories map to the same
    artifact.
    """
    return cache_dir / f"{document_path.stem}.{extension}"


def _mtime_ns(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


async def stat_pair(document_path: Path, artifact_path: Path) -> ArtifactStat:
    """Fetch document and artifact modification times concurrently.

    Raises:
        DocumentNotFoundError: The document vanished before it could be stat'ed.
        CacheIOError: Any other filesystem failure.
    """
    try:
        document_mtime, artifact_mtime = await asyncio.gather(
            asyncio.to_thread(_mtime_ns, document_path),
            asyncio.to_thread(_mtime_ns, artifact_path),
        )
    except OSError as e:
        raise CacheIOError(e.filename or artifact_path, e) from e

    if document_mtime is None:
        raise DocumentNotFoundError(document_path)

    return ArtifactStat(
        document_path=document_path,
        artifact_path=artifact_path,
        document_mtime_ns=document_mtime,
        artifact_mtime_ns=artifact_mtime,
    )
