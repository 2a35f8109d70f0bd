"""Tests for attach_context and the error_context context manager."""

import pytest

from saas_backend.error_context import attach_context, error_context
from saas_backend.exceptions import InternalError, NotFoundError


def test_attach_context_wraps_native_failure() -> None:
    error = attach_context(FileNotFoundError("file missing"), "loading config")

    assert isinstance(error, InternalError)
    assert error.chain.entries == ("file missing", "loading config")
    rendered = error.chain.render()
    assert rendered.index("file missing") < rendered.index("loading config")


def test_attach_context_twice_appends_in_order() -> None:
    first = attach_context(FileNotFoundError("file missing"), "loading config")
    second = attach_context(first, "startup")

    assert second.chain.entries == ("file missing", "loading config", "startup")
    assert second.chain.root == "file missing"
    assert second.message == "file missing"
    # the first error still has only its own layer
    assert first.chain.entries == ("file missing", "loading config")


def test_attach_context_escalates_classified_error() -> None:
    error = attach_context(NotFoundError("User with id 1 not found"), "syncing")

    assert isinstance(error, InternalError)
    assert error.status_code == 500
    assert error.chain.entries == ("User with id 1 not found", "syncing")


def test_attach_context_evaluates_callable() -> None:
    error = attach_context(RuntimeError("boom"), lambda: "built lazily")
    assert error.chain.contexts == ("built lazily",)


def test_error_context_success_path_is_transparent() -> None:
    def explode() -> str:
        raise AssertionError("lazy context evaluated on success")

    with error_context(explode):
        value = 41 + 1

    assert value == 42


def test_error_context_wraps_and_chains_original() -> None:
    original = FileNotFoundError("file missing")

    with pytest.raises(InternalError) as excinfo:
        with error_context("loading config"):
            raise original

    assert excinfo.value.chain.entries == ("file missing", "loading config")
    assert excinfo.value.root is original
    assert excinfo.value.__cause__ is original


def test_nested_error_context_does_not_nest_internal_errors() -> None:
    with pytest.raises(InternalError) as excinfo:
        with error_context("startup"):
            with error_context(lambda: "loading config"):
                raise FileNotFoundError("file missing")

    error = excinfo.value
    assert error.chain.entries == ("file missing", "loading config", "startup")
    assert not isinstance(error.root, InternalError)


def test_error_context_lets_classified_errors_through() -> None:
    original = NotFoundError("User with id 1 not found")

    with pytest.raises(NotFoundError) as excinfo:
        with error_context("loading user"):
            raise original

    assert excinfo.value is original


@pytest.mark.asyncio
async def test_error_context_inside_coroutine() -> None:
    async def fetch() -> None:
        raise ConnectionResetError("peer reset")

    with pytest.raises(InternalError) as excinfo:
        with error_context("fetching profile"):
            await fetch()

    assert excinfo.value.chain.entries == ("peer reset", "fetching profile")
