# src/cache/cache_factory.py - v3
"""Factory for render cache instantiation."""

from __future__ import annotations

from md_serve.cache.render_cache import RenderCache
from md_serve.config.settings import Settings
from md_serve.rendering.base_renderer import BaseRenderer
from md_serve.rendering.renderer_factory import create_renderer


def create_render_cache(
    settings: Settings | None = None,
    renderer: BaseRenderer | None = None,
) -> RenderCache:
    """Build the render cache described by ``settings``.

    Args:
        settings: Application settings. Defaults to ./html_cache and pandoc.
        renderer: Renderer to use instead of the configured backend.

    Returns:
        Configured RenderCache.
    """
    if renderer is None:
        renderer = create_renderer(settings)

    if settings is None:
        return RenderCache(cache_dir="./html_cache", renderer=renderer)

    return RenderCache(
        cache_dir=settings.html_cache_path,
        renderer=renderer,
        artifact_extension=settings.artifact_extension,
    )
