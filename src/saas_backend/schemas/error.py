"""Error response schema.

All error responses use the same envelope: {"error": "CODE", "message": "..."},
plus "details" when the error carries structured details. ``translate`` in
error_translation.py builds it from an ``AppError``.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Top-level error envelope returned by all error responses."""

    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(default=None, description="Structured error details")

    def to_body(self) -> dict[str, Any]:
        """Dump for JSONResponse, leaving ``details`` out entirely when unset."""
        return self.model_dump(exclude={"details"} if self.details is None else None)
