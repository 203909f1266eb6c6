# src/server/app.py - v1
"""aiohttp application wiring and the serve loop."""

from __future__ import annotations

import asyncio
import logging

from aiohttp import web

from md_serve.cache.cache_factory import create_render_cache
from md_serve.cache.render_cache import RenderCache
from md_serve.config.settings import Settings
from md_serve.rendering.base_renderer import BaseRenderer
from md_serve.server.middleware import request_context_middleware
from md_serve.server.router import RequestRouter

logger = logging.getLogger(__name__)

SETTINGS_KEY = web.AppKey("settings", Settings)
ROUTER_KEY = web.AppKey("router", RequestRouter)


def create_app(
    settings: Settings | None = None,
    renderer: BaseRenderer | None = None,
    cache: RenderCache | None = None,
) -> web.Application:
    """Build the application.

    Args:
        settings: Application settings. Loaded from the environment if None.
        renderer: Renderer override (tests use a fake).
        cache: Fully built cache override; takes precedence over ``renderer``.
    """
    settings = settings or Settings()
    cache = cache or create_render_cache(settings, renderer=renderer)

    app = web.Application(middlewares=[request_context_middleware])
    app[SETTINGS_KEY] = settings
    app[ROUTER_KEY] = RequestRouter(
        document_root=settings.document_root,
        cache=cache,
        markup_extension=settings.markup_extension,
    )

    app.router.add_get("/favicon.ico", handle_favicon)
    app.router.add_get("/{path:.*}", handle_path)
    return app


async def handle_favicon(request: web.Request) -> web.Response:
    return web.Response()


async def handle_path(request: web.Request) -> web.Response:
    return await request.app[ROUTER_KEY].dispatch(request.match_info["path"])


async def run_server(settings: Settings, renderer: BaseRenderer | None = None) -> None:
    """Serve until cancelled."""
    app = create_app(settings, renderer=renderer)
    settings = app[SETTINGS_KEY]
    runner = web.AppRunner(app, access_log=None)
    await runner.setup()
    site = web.TCPSite(runner, settings.listening_host, settings.listening_port)
    try:
        await site.start()
        for address in runner.addresses:
            logger.info("Bound to %s", address)
        logger.info(
            "Serving %s, caching HTML in %s",
            settings.document_root.resolve(), settings.html_cache_path,
        )
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
