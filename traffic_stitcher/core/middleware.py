"""
Request logging middleware
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status and wall time.

    Stitch requests hold the connection until ffmpeg exits, so the timing is
    the stitch duration.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        client_host = request.client.host if request.client is not None else "unknown"
        logger.info("Request: %s %s from %s", request.method, request.url.path, client_host)

        response = await call_next(request)

        logger.info(
            "Response: %s %s -> %d in %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - started,
        )
        return response
