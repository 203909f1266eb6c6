# src/rendering/pandoc_renderer.py - v1
"""Renderer backed by the pandoc command-line tool.

The child process runs with an empty environment. The executable itself is
looked up on the server's PATH first, since a cleared environment has none.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

from md_serve.core.errors import ToolExitError, ToolInvocationError
from md_serve.rendering.base_renderer import BaseRenderer

logger = logging.getLogger(__name__)


class PandocRenderer(BaseRenderer):
    """Convert markdown to a standalone HTML document with pandoc."""

    def __init__(self, executable: str = "pandoc") -> None:
        self._executable = executable

    @property
    def name(self) -> str:
        return "pandoc"

    @property
    def executable(self) -> str:
        return self._executable

    def build_command(self, document_path: Path, artifact_path: Path) -> list[str]:
        """Return the full argument vector for one conversion."""
        title = document_path.stem
        return [
            shutil.which(self._executable) or self._executable,
            "-f", "markdown",
            "-t", "html",
            "-s",
            f"--metadata=title:{title}",
            "-o", str(artifact_path),
            str(document_path),
        ]

    async def render(self, document_path: Path, artifact_path: Path) -> None:
        command = self.build_command(document_path, artifact_path)
        logger.info("Converting %s to %s", document_path, artifact_path)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                env={},
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ToolInvocationError(self._executable, e) from e

        _, stderr = await process.communicate()
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace")
            logger.warning(
                "%s exited with status %s for %s",
                self._executable, process.returncode, document_path,
            )
            raise ToolExitError(self._executable, process.returncode, message)
