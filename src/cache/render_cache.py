# src/cache/render_cache.py - v1
"""On-disk HTML cache for rendered markup documents.

Artifacts live flat in one directory, one ``<stem>.html`` per document. An
artifact is reused while its mtime is not older than its document's; otherwise
the renderer is run again. Concurrent resolutions of the same artifact share a
single render.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from md_serve.cache.freshness import artifact_path_for, stat_pair
from md_serve.cache.inflight import InFlightRegistry
from md_serve.cache.models import RenderOutcome
from md_serve.core.errors import (
    CacheIOError,
    DocumentNotFoundError,
    RendererError,
    RenderFailedError,
)
from md_serve.rendering.base_renderer import BaseRenderer

logger = logging.getLogger(__name__)


class RenderCache:
    """Resolve documents to fresh HTML artifacts, rendering when stale."""

    def __init__(
        self,
        cache_dir: Path | str,
        renderer: BaseRenderer,
        artifact_extension: str = "html",
    ) -> None:
        self._dir = Path(cache_dir).expanduser()
        self._renderer = renderer
        self._extension = artifact_extension
        self._in_flight: InFlightRegistry[RenderOutcome] = InFlightRegistry()

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def renderer(self) -> BaseRenderer:
        return self._renderer

    @property
    def in_flight(self) -> InFlightRegistry[RenderOutcome]:
        return self._in_flight

    def artifact_path(self, document_path: Path) -> Path:
        """Return the artifact path for a document (it may not exist yet)."""
        return artifact_path_for(document_path, self._dir, self._extension)

    async def resolve(self, document_path: Path | str) -> Path:
        """Return the path of a fresh artifact for ``document_path``.

        Raises:
            DocumentNotFoundError: The document does not exist.
            RenderFailedError: The document was stale and rendering failed.
            CacheIOError: The cache directory or timestamps could not be read.
        """
        outcome = await self.resolve_outcome(document_path)
        return outcome.artifact_path

    async def resolve_outcome(self, document_path: Path | str) -> RenderOutcome:
        """Like :meth:`resolve` but reports whether a render happened."""
        document_path = Path(document_path)
        if not await asyncio.to_thread(document_path.is_file):
            raise DocumentNotFoundError(document_path)

        await self._ensure_directory()
        artifact_path = self.artifact_path(document_path)

        outcome, shared = await self._in_flight.run(
            artifact_path, lambda: self._refresh(document_path, artifact_path)
        )
        if shared:
            outcome = outcome.model_copy(
                update={"shared": True, "document_path": document_path}
            )
        return outcome

    async def is_fresh(self, document_path: Path | str) -> bool:
        """Report freshness without rendering."""
        document_path = Path(document_path)
        stat = await stat_pair(document_path, self.artifact_path(document_path))
        return not stat.is_stale

    def list_artifacts(self) -> list[Path]:
        """List cached artifacts, sorted by name."""
        if not self._dir.is_dir():
            return []
        return sorted(self._dir.glob(f"*.{self._extension}"))

    async def _ensure_directory(self) -> None:
        try:
            await asyncio.to_thread(self._dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(self._dir, e) from e

    async def _refresh(self, document_path: Path, artifact_path: Path) -> RenderOutcome:
        stat = await stat_pair(document_path, artifact_path)

        if not stat.is_stale:
            logger.info(
                "Using cached copy of %s, which is at %s", document_path, artifact_path
            )
            return RenderOutcome(
                status="fresh", document_path=document_path, artifact_path=artifact_path
            )

        try:
            await self._renderer.render(document_path, artifact_path)
        except RendererError as e:
            logger.error("Rendering %s failed: %s", document_path, e)
            raise RenderFailedError(document_path, e) from e

        if not await asyncio.to_thread(artifact_path.is_file):
            missing = CacheIOError(
                artifact_path,
                FileNotFoundError(f"{self._renderer.name} reported success but wrote nothing"),
            )
            logger.error("Rendering %s failed: %s", document_path, missing)
            raise RenderFailedError(document_path, missing)

        logger.info(
            "Rendered %s to %s",
            document_path, artifact_path,
            extra={"data": {"renderer": self._renderer.name}},
        )
        return RenderOutcome(
            status="rendered", document_path=document_path, artifact_path=artifact_path
        )
