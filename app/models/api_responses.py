"""
API Response Models

Pydantic models for consistent API response structures.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ActionResponse(BaseModel, Generic[T]):
    """
    Uniform envelope returned by every request handler.

    `data` is present on success (except for operations with no result) and
    `error` carries a short human-readable message on failure.
    """

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[T] = Field(None, description="Operation-specific result")
    error: Optional[str] = Field(None, description="Failure message")

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResponse":
        return cls(success=False, error=error)


class AskRequest(BaseModel):
    """Request body for the ask-assistant endpoint."""

    question: Any = Field(None, description="The user's question")
