"""
Presentation Layer - Request context middleware

Gives every request an id (the caller's ``X-Request-ID`` when supplied) and
binds it to the structlog context so that all log lines emitted while the
request is handled carry it.
"""

import uuid
from time import perf_counter

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from spp_forecast.shared import bind_request_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_request_context(request_id=request_id, path=request.url.path)

        start = perf_counter()
        response: Response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http.request.completed",
            method=request.method,
            status=response.status_code,
            duration_ms=round((perf_counter() - start) * 1000, 2),
        )
        return response
