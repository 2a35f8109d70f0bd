"""Health check and error-handling example endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from saas_backend.db.errors import database_errors
from saas_backend.dependencies import DB
from saas_backend.error_context import error_context
from saas_backend.exceptions import DomainValidationError

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "SaaS Backend API"


@router.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check endpoint: verifies database connectivity.

    Returns 200 only if the database answers a ping; otherwise the failure
    surfaces as DATABASE_ERROR.
    """
    with database_errors():
        await db.execute(text("SELECT 1"))
    return {"status": "ok"}


@router.get("/example/success", response_class=PlainTextResponse)
async def example_success() -> str:
    return "Success"


@router.get("/example/error")
async def example_error() -> None:
    """Raise a classified error directly."""
    raise DomainValidationError("Example validation error")


def _flaky_operation() -> str:
    raise RuntimeError("Something went wrong")


@router.get("/example/result", response_class=PlainTextResponse)
async def example_result() -> str:
    """Let an unclassified failure pick up context on its way out."""
    with error_context("Operation failed"):
        return _flaky_operation()
