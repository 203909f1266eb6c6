# src/core/errors.py - v1
"""Error taxonomy shared by the render cache, renderers and the HTTP layer.

The cache and the raw resource reader raise these; the router is the only
place that turns them into HTTP responses.
"""

from __future__ import annotations

from pathlib import Path


class MdServeError(Exception):
    """Base class for all md-serve failures."""


class DocumentNotFoundError(MdServeError):
    """Raised when a requested document or resource does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"No such file: {self.path}")


class RendererError(MdServeError):
    """Base class for failures of the external renderer."""

    def __init__(self, executable: str, message: str) -> None:
        self.executable = executable
        super().__init__(message)


class ToolInvocationError(RendererError):
    """Raised when the renderer process could not be started."""

    def __init__(self, executable: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(executable, f"Could not start {executable!r}: {cause}")


class ToolExitError(RendererError):
    """Raised when the renderer exits with a non-zero status."""

    def __init__(self, executable: str, code: int, stderr: str = "") -> None:
        self.code = code
        self.stderr = stderr
        message = f"{executable!r} exited with status {code}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(executable, message)


class RenderFailedError(MdServeError):
    """Raised by the render cache when a stale document could not be rendered."""

    def __init__(self, document: Path | str, cause: BaseException) -> None:
        self.document = Path(document)
        self.cause = cause
        super().__init__(f"Failed to render {self.document}: {cause}")


class CacheIOError(MdServeError):
    """Filesystem failure unrelated to a missing document or the renderer."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"I/O error on {self.path}: {cause}")


class ArtifactEncodingError(MdServeError):
    """Raised when a rendered artifact is not valid UTF-8 text."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path} is not valid UTF-8: {cause}")
