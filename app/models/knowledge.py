"""
Knowledge Base Models

This module defines the data models for knowledge base entries and the
mapping between the API shape and the stored MongoDB document.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class KnowledgeEntry(BaseModel):
    """A persisted question/answer pair."""

    id: str = Field(..., description="Store-assigned unique identifier")
    question: str = Field(..., description="The question that was asked")
    answer: str = Field(..., description="The assistant's answer")
    tags: List[str] = Field(default_factory=list, description="Short labels")
    is_pinned: bool = Field(False, description="Whether the entry is pinned")
    created_at: datetime = Field(..., description="When the entry was created")
    updated_at: datetime = Field(..., description="When the entry was last updated")

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # pymongo returns naive datetimes unless the client is tz-aware
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "KnowledgeEntry":
        """
        Build an entry from a stored document.

        Stored documents use camelCase field names (isPinned, createdAt, updatedAt).
        """
        return cls(
            id=str(document["_id"]),
            question=document["question"],
            answer=document["answer"],
            tags=document.get("tags") or [],
            is_pinned=bool(document.get("isPinned", False)),
            created_at=document["createdAt"],
            updated_at=document.get("updatedAt") or document["createdAt"],
        )


def build_entry_document(
    question: str,
    answer: str,
    tags: List[str],
    now: datetime,
) -> Dict[str, Any]:
    """Build the document inserted for a new knowledge base entry."""
    return {
        "question": question,
        "answer": answer,
        "tags": tags,
        "isPinned": False,
        "createdAt": now,
        "updatedAt": now,
    }


class KnowledgeEntryCreate(BaseModel):
    """Request body for saving a Q&A pair to the knowledge base."""

    question: Any = Field(None, description="Question text")
    answer: Any = Field(None, description="Answer text")
    tags: Optional[Any] = Field(None, description="Optional list of tags")
