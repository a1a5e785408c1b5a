"""
Request context middleware for structured logging.
"""

from __future__ import annotations

import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from storage_gateway.infra.config.logging_config import (
    bind_context,
    clear_context,
    get_logger,
)

log = get_logger("http")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request_id/path/method for every log line of an API request.

    Static asset requests pass through without request logging.
    """

    def __init__(self, app, api_prefix: str = "/api") -> None:
        super().__init__(app)
        self.api_prefix = api_prefix

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        path = request.url.path
        if not path.startswith(self.api_prefix):
            return await call_next(request)

        request_id = request.headers.get("x-request-id") or uuid4().hex
        bind_context(request_id=request_id, path=path, method=request.method)
        started = time.perf_counter()

        log.info(
            "request.start",
            client_ip=request.client.host if request.client else None,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            log.info(
                "request.end",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response
        finally:
            clear_context()
