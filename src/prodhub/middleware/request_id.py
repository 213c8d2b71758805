"""Request ID middleware — unique ID per request for log correlation.

Learn: Every request gets a UUID, either from the incoming X-Request-ID
header or auto-generated. Contextvars are reset first so nothing from a
previous request (request_id, user_id) leaks into this one's logs; then
request_id is bound and echoed in the response header.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Generate and propagate a unique request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.debug(
            "http.request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response
