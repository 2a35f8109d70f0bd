"""Application exceptions raised by services, repositories and config loading.

Every failure that reaches the request boundary is an ``AppError``. Each
subclass pins an HTTP status and a stable machine-readable code; the exception
handlers in main.py hand the error to ``error_translation.translate`` which
renders the envelope: {"error": "...", "message": "...", "details": ...}.

``InternalError`` is the catch-all: it wraps any exception that could not be
classified and carries an ``ErrorChain`` of context strings layered on top of
the original failure (see ``error_context``).
"""

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Self


class AppError(Exception):
    """Base class for all application errors."""

    status_code: ClassVar[int] = 500
    code: ClassVar[str] = "INTERNAL_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestError(AppError):
    """Input rejected structurally before any domain logic ran."""

    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(AppError):
    """Credentials are missing or invalid."""

    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    """Caller is authenticated but not allowed to do this."""

    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(AppError):
    """Raised when a requested entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    @classmethod
    def for_entity(cls, entity: str, identifier: object) -> Self:
        return cls(f"{entity} with id {identifier} not found")


class ConflictError(AppError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""

    status_code = 409
    code = "CONFLICT"


class DomainValidationError(AppError):
    """Input is well-formed but violates a business rule."""

    status_code = 422
    code = "VALIDATION_ERROR"


class DatabaseError(AppError):
    """The persistence layer failed."""

    status_code = 500
    code = "DATABASE_ERROR"


class ConfigError(AppError):
    """Settings could not be loaded."""

    status_code = 500
    code = "CONFIG_ERROR"


class SerializationError(AppError):
    """A payload could not be encoded or decoded."""

    status_code = 400
    code = "SERIALIZATION_ERROR"


def _display(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _nested_causes(exc: BaseException) -> tuple[str, ...]:
    """Display messages of everything ``exc`` was raised from, innermost first."""
    messages: list[str] = []
    seen = {id(exc)}
    current = exc.__cause__ or (None if exc.__suppress_context__ else exc.__context__)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(_display(current))
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    return tuple(reversed(messages))


@dataclass(frozen=True)
class ErrorChain:
    """Diagnostic narrative of an unclassified failure.

    ``causes`` holds whatever the root failure was itself raised from,
    ``root`` is the failure that was wrapped, and ``contexts`` are the strings
    attached on the way up, oldest first.
    """

    root: str
    causes: tuple[str, ...] = ()
    contexts: tuple[str, ...] = ()

    @classmethod
    def from_exception(cls, exc: BaseException) -> Self:
        return cls(root=_display(exc), causes=_nested_causes(exc))

    def with_context(self, context: str) -> Self:
        return replace(self, contexts=(*self.contexts, context))

    @property
    def entries(self) -> tuple[str, ...]:
        return (*self.causes, self.root, *self.contexts)

    def render(self) -> str:
        return " -> ".join(self.entries)


class InternalError(AppError):
    """Any failure not otherwise classified, or explicitly escalated.

    The HTTP-facing message is the root failure's message; the full chain is
    only ever logged.
    """

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        chain: ErrorChain | None = None,
        root: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.chain = chain if chain is not None else ErrorChain(root=message)
        self.root = root
        super().__init__(self.chain.root, details=details)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "InternalError":
        if isinstance(exc, InternalError):
            return exc
        chain = ErrorChain.from_exception(exc)
        return cls(chain.root, chain=chain, root=exc)

    def with_context(self, context: str) -> "InternalError":
        """Return a new error with ``context`` appended; this one is left untouched."""
        return InternalError(
            self.message,
            chain=self.chain.with_context(context),
            root=self.root,
            details=self.details,
        )
