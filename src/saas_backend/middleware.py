"""FastAPI middleware for request tracing."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from saas_backend.error_translation import translate
from saas_backend.exceptions import InternalError

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind per-request context into structlog for every log line of the request.

    - Reads X-Request-ID from request headers, or generates a UUID if missing
    - Binds request_id, method and path to structlog contextvars, so the
      error translator logs them without needing the request object
    - Adds X-Request-ID to response headers
    - Renders anything that escaped the exception handlers as INTERNAL_ERROR,
      so no request ends without the error envelope

    Usage:
        app.add_middleware(RequestContextMiddleware)
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            status_code, body = translate(InternalError.from_exception(exc))
            response = JSONResponse(status_code=status_code, content=body)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
