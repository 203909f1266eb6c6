# src/rendering/base_renderer.py - v1
"""Abstract renderer interface: turn one markup document into one HTML file."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseRenderer(ABC):
    """Unified interface for document renderers.

    The render cache only depends on this interface, so tests can swap in a
    fake without spawning processes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend identifier used in logs."""

    @abstractmethod
    async def render(self, document_path: Path, artifact_path: Path) -> None:
        """Render ``document_path`` into ``artifact_path``.

        Raises:
            ToolInvocationError: The renderer could not be started.
            ToolExitError: The renderer ran and reported failure.
        """
