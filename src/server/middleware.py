# src/server/middleware.py - v1
"""aiohttp middleware: per-request logging context and access log."""

from __future__ import annotations

import logging
import time
import uuid

from aiohttp import web

from md_serve.logging.context import clear_context, set_request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


@web.middleware
async def request_context_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Tag log records with a request id and log one line per request."""
    request_id = uuid.uuid4().hex[:12]
    set_request_context(request_id, request.method, request.path)
    start = time.perf_counter()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    except web.HTTPException as e:
        status = e.status
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s",
            request.method, request.path, status,
            extra={"data": {"status": status, "elapsed_ms": round(elapsed_ms, 1)}},
        )
        clear_context()
