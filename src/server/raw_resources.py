# src/server/raw_resources.py - v1
"""Raw file passthrough: whole-file reads with a guessed content type."""

from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from md_serve.core.errors import CacheIOError, DocumentNotFoundError

FALLBACK_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class RawResource:
    """File contents plus the content type to answer with."""

    body: bytes
    content_type: str


def guess_content_type(path: Path) -> str:
    """Guess a MIME type from the file name, defaulting to octet-stream."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or FALLBACK_CONTENT_TYPE


async def serve(path: Path) -> RawResource:
    """Read ``path`` fully into memory.

    Raises:
        DocumentNotFoundError: The path does not exist or is not a file.
        CacheIOError: The file exists but could not be read.
    """
    try:
        body = await asyncio.to_thread(path.read_bytes)
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
        raise DocumentNotFoundError(path) from e
    except OSError as e:
        raise CacheIOError(path, e) from e
    return RawResource(body=body, content_type=guess_content_type(path))
