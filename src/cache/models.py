# src/cache/models.py - v2
"""Render cache domain models: ArtifactStat, RenderOutcome."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class ArtifactStat(BaseModel):
    """Modification times gathered for one freshness decision.

    Times are ``st_mtime_ns``; ``artifact_mtime_ns`` is None when the
    artifact does not exist yet.
    """

    document_path: Path
    artifact_path: Path
    document_mtime_ns: int
    artifact_mtime_ns: int | None = None

    @property
    def is_stale(self) -> bool:
        """Stale when the artifact is missing or older than its document."""
        return (
            self.artifact_mtime_ns is None
            or self.artifact_mtime_ns < self.document_mtime_ns
        )


class RenderOutcome(BaseModel):
    """Result of a successful cache resolution.

    ``status`` is "fresh" on a cache hit and "rendered" when the renderer ran.
    ``shared`` is True when the caller joined a resolution already in flight
    for the same artifact instead of starting its own.
    """

    status: Literal["fresh", "rendered"]
    document_path: Path
    artifact_path: Path
    shared: bool = False
