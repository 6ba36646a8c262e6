"""Request context middleware: request id, timing and one structured log line per request.

Data room calls name the acting user in the query string (``userId``,
``revokedBy``) rather than in a session, so the access line carries that id
as well. Share-link tokens in the path are redacted by the logging filter.
"""

import logging
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..core.logging_config import request_id_var

logger = logging.getLogger(__name__)

_ACTOR_PARAMS = ("userId", "revokedBy")


def _actor(request: Request) -> Optional[str]:
    for name in _ACTOR_PARAMS:
        value = request.query_params.get(name)
        if value:
            return value
    return None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id, times it and writes the access line."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:16]
        token = request_id_var.set(request_id)
        started = time.monotonic()
        try:
            response = await call_next(request)
            elapsed_ms = round((time.monotonic() - started) * 1000, 1)

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed_ms}ms"

            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(
                level,
                "%s %s -> %d",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                    "actor_id": _actor(request),
                },
            )
            return response
        finally:
            request_id_var.reset(token)
