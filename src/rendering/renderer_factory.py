# src/rendering/renderer_factory.py - v1
"""Factory: instantiate the configured renderer backend."""

from __future__ import annotations

from typing import Callable

from md_serve.config.settings import Settings
from md_serve.rendering.base_renderer import BaseRenderer
from md_serve.rendering.pandoc_renderer import PandocRenderer

# Registry maps backend name → builder taking the executable.
_RENDERER_REGISTRY: dict[str, Callable[[str], BaseRenderer]] = {
    "pandoc": PandocRenderer,
}


class UnsupportedRendererError(ValueError):
    """Raised when no renderer is registered under a backend name."""


def create_renderer(settings: Settings | None = None) -> BaseRenderer:
    """Create the renderer named by ``settings.renderer_backend``.

    Args:
        settings: Application settings. Defaults to pandoc on PATH.

    Raises:
        UnsupportedRendererError: If the backend is not registered.
    """
    backend = "pandoc" if settings is None else settings.renderer_backend
    executable = "pandoc" if settings is None else settings.renderer_executable

    builder = _RENDERER_REGISTRY.get(backend)
    if builder is None:
        raise UnsupportedRendererError(
            f"No renderer for backend {backend!r}. "
            f"Supported: {', '.join(sorted(_RENDERER_REGISTRY))}"
        )
    return builder(executable)


def register_renderer(backend: str, builder: Callable[[str], BaseRenderer]) -> None:
    """Register a custom renderer backend."""
    _RENDERER_REGISTRY[backend] = builder


def supported_backends() -> list[str]:
    """Return registered backend names."""
    return sorted(_RENDERER_REGISTRY)
