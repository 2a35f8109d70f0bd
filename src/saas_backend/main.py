from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from saas_backend.db.session import shutdown
from saas_backend.error_translation import translate
from saas_backend.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    DomainValidationError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    SerializationError,
    UnauthorizedError,
)
from saas_backend.logging import get_logger
from saas_backend.middleware import RequestContextMiddleware
from saas_backend.routers import health, user

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup runs before yield, shutdown after: close pooled DB connections."""
    logger.info("application_started")
    yield
    await shutdown()
    logger.info("server_shutdown_complete")


app = FastAPI(title="SaaS Backend API", lifespan=lifespan)
app.add_middleware(RequestContextMiddleware)
app.include_router(health.router)
app.include_router(user.router)


# FastAPI raises a bare 400 only when it cannot read the request body.
_HTTP_STATUS_ERRORS: dict[int, type[AppError]] = {
    400: SerializationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: DomainValidationError,
}

_HIDDEN_ERROR_KEYS = ("input", "url")


def _error_response(error: AppError, headers: dict[str, str] | None = None) -> JSONResponse:
    status_code, body = translate(error)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable JSON is a serialization error; anything else failed validation."""
    errors = exc.errors()
    for err in errors:
        if err.get("type") == "json_invalid":
            reason = (err.get("ctx") or {}).get("error", err.get("msg", ""))
            return _error_response(SerializationError(f"Malformed JSON body: {reason}"))
    # never echo submitted values back
    reported = [{k: v for k, v in err.items() if k not in _HIDDEN_ERROR_KEYS} for err in errors]
    error = DomainValidationError(
        "Request validation failed",
        details={"errors": jsonable_encoder(reported)},
    )
    return _error_response(error)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-raised HTTP errors (unknown route, wrong method) use the same envelope.

    Statuses outside the taxonomy collapse to BAD_REQUEST or INTERNAL_ERROR.
    """
    if exc.status_code >= 500:
        error: AppError = InternalError(str(exc.detail))
    else:
        error = _HTTP_STATUS_ERRORS.get(exc.status_code, BadRequestError)(str(exc.detail))
    return _error_response(error, headers=exc.headers)
