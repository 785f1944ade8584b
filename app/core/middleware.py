from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.context import clear_request_context, set_request_context

REQUEST_ID_HEADER = "X-Request-Id"

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        """
        Binds the request id and route to the logging context for the request.

        The caller's X-Request-Id header wins; otherwise a fresh uuid4 is used.
        The id is echoed back on the response.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_request_context(request_id, f"{request.method} {request.url.path}")
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "request done status=%s duration_ms=%.1f",
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            clear_request_context()
