"""Turn an ``AppError`` into an HTTP status and response body.

``translate`` is the only place errors get logged. Exception handlers call it
once per failed request; it picks the log severity from ``severity_for`` and
never puts chain details into the client-facing message.
"""

from enum import StrEnum
from typing import Any

from saas_backend.exceptions import AppError, ForbiddenError, InternalError, UnauthorizedError
from saas_backend.logging import get_logger
from saas_backend.schemas.error import ErrorResponse

logger = get_logger(__name__)


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    DEBUG = "debug"


def severity_for(error: AppError) -> Severity:
    """Server errors are errors; auth failures are warnings; other client errors are debug."""
    if error.status_code >= 500:
        return Severity.ERROR
    if isinstance(error, UnauthorizedError | ForbiddenError):
        return Severity.WARNING
    return Severity.DEBUG


def _log(error: AppError) -> None:
    fields: dict[str, Any] = {"code": error.code, "status": error.status_code}
    if isinstance(error, InternalError):
        fields["error"] = error.chain.render()
        fields["chain"] = list(error.chain.entries)
        if error.root is not None:
            fields["exc_info"] = error.root
    else:
        fields["error"] = error.message

    match severity_for(error):
        case Severity.ERROR:
            logger.error("server_error", **fields)
        case Severity.WARNING:
            logger.warning("auth_error", **fields)
        case Severity.DEBUG:
            logger.debug("client_error", **fields)


def translate(error: AppError) -> tuple[int, dict[str, Any]]:
    """Return ``(status, body)`` for ``error`` and log it once."""
    _log(error)
    body = ErrorResponse(error=error.code, message=error.message, details=error.details)
    return error.status_code, body.to_body()
