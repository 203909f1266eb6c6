# src/server/router.py - v1
"""Map request paths to rendered documents or raw files.

Paths whose last segment has no extension are markup documents: the markup
extension is appended, the render cache resolves them and the artifact is
returned as HTML. Every other path is read as-is. This module is also the one
place where md-serve errors become HTTP responses.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import Literal

from aiohttp import web

from md_serve.cache.render_cache import RenderCache
from md_serve.core.errors import (
    ArtifactEncodingError,
    CacheIOError,
    DocumentNotFoundError,
    MdServeError,
    RenderFailedError,
    ToolInvocationError,
)
from md_serve.server import raw_resources

logger = logging.getLogger(__name__)

RouteKind = Literal["markup", "raw"]

HTML_CONTENT_TYPE = "text/html"


def classify(url_path: str) -> RouteKind:
    """Return "markup" when the last path segment has no extension."""
    return "raw" if PurePosixPath(url_path).suffix else "markup"


def resolve_under_root(root: Path, url_path: str) -> Path:
    """Join ``url_path`` onto ``root``, refusing paths that escape it.

    Raises:
        DocumentNotFoundError: Empty path, a path outside ``root``, or one
            that cannot be resolved.
    """
    relative = url_path.strip("/")
    if not relative:
        raise DocumentNotFoundError(root)

    try:
        root = root.resolve()
        candidate = (root / relative).resolve()
    except (OSError, ValueError, RuntimeError) as e:
        # NUL bytes, symlink loops
        raise DocumentNotFoundError(relative) from e
    if not candidate.is_relative_to(root):
        raise DocumentNotFoundError(relative)
    return candidate


def status_for(error: MdServeError) -> int:
    """HTTP status for an md-serve error."""
    if isinstance(error, DocumentNotFoundError):
        return 404
    if isinstance(error, RenderFailedError) and isinstance(error.cause, ToolInvocationError):
        return 503
    return 500


def error_response(error: MdServeError) -> web.Response:
    """Plain-text response carrying the error description."""
    status = status_for(error)
    if status == 404:
        logger.warning("%s", error)
    else:
        logger.error("%s", error)
    return web.Response(status=status, text=str(error), content_type="text/plain")


async def read_artifact(path: Path) -> str:
    """Read a rendered artifact as UTF-8 text.

    Raises:
        CacheIOError: The artifact could not be read.
        ArtifactEncodingError: The artifact is not valid UTF-8.
    """
    try:
        data = await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        raise CacheIOError(path, e) from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ArtifactEncodingError(path, e) from e


class RequestRouter:
    """Serve one request path from ``document_root``."""

    def __init__(
        self,
        document_root: Path | str,
        cache: RenderCache,
        markup_extension: str = "md",
    ) -> None:
        self._root = Path(document_root)
        self._cache = cache
        self._markup_extension = markup_extension

    @property
    def cache(self) -> RenderCache:
        return self._cache

    def document_path(self, url_path: str) -> Path:
        """Source document for an extensionless request path."""
        stem = url_path.strip("/")
        if not stem:
            raise DocumentNotFoundError(self._root)
        return resolve_under_root(self._root, f"{stem}.{self._markup_extension}")

    async def dispatch(self, url_path: str) -> web.Response:
        """Route ``url_path`` and convert any failure into a response."""
        try:
            if classify(url_path) == "markup":
                return await self.serve_markup(url_path)
            return await self.serve_raw(url_path)
        except MdServeError as e:
            return error_response(e)

    async def serve_markup(self, url_path: str) -> web.Response:
        artifact = await self._cache.resolve(self.document_path(url_path))
        html = await read_artifact(artifact)
        return web.Response(text=html, content_type=HTML_CONTENT_TYPE, charset="utf-8")

    async def serve_raw(self, url_path: str) -> web.Response:
        resource = await raw_resources.serve(resolve_under_root(self._root, url_path))
        return web.Response(body=resource.body, content_type=resource.content_type)
