"""Attach human-readable context to failures on their way to the request boundary.

Usage:
    with error_context("loading config"):
        raw = path.read_text()

    with error_context(lambda: f"syncing user {user_id}"):
        await client.push(user_id)

Anything raised inside the block that isn't already a classified ``AppError``
comes out as an ``InternalError`` whose chain ends with the given context.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from saas_backend.exceptions import AppError, InternalError

Context = str | Callable[[], str]


def attach_context(exc: BaseException, context: Context) -> InternalError:
    """Wrap ``exc`` as an ``InternalError`` with ``context`` as its outermost layer.

    An ``InternalError`` gets the context appended to its existing chain
    instead of being nested inside a new one. Callable contexts are evaluated
    here, so callers only pay for formatting on the failure path.
    """
    text = context() if callable(context) else context
    return InternalError.from_exception(exc).with_context(text)


@contextmanager
def error_context(context: Context) -> Iterator[None]:
    """Re-raise unclassified failures in the block with ``context`` attached.

    Classified errors (``NotFoundError``, ``ConflictError`` ...) pass through
    unchanged so their status survives.
    """
    try:
        yield
    except AppError as exc:
        if not isinstance(exc, InternalError):
            raise
        raise attach_context(exc, context) from exc
    except Exception as exc:
        raise attach_context(exc, context) from exc
