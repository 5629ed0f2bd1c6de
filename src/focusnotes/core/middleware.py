"""HTTP middleware."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger(__name__)

SKIP_PATHS = ("/health", "/docs", "/redoc", "/openapi.json")


async def request_logging_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log method, path, status and duration of every API request."""
    path = request.url.path
    if path.startswith(SKIP_PATHS):
        return await call_next(request)

    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "%s %s failed after %.1fms",
            request.method,
            path,
            (time.perf_counter() - start) * 1000,
        )
        raise

    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        path,
        response.status_code,
        (time.perf_counter() - start) * 1000,
    )
    return response
