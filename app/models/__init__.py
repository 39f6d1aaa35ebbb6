# Shared data models
from app.models.knowledge import (
    KnowledgeEntry,
    KnowledgeEntryCreate,
    build_entry_document,
)
from app.models.api_responses import ActionResponse, AskRequest

__all__ = [
    "KnowledgeEntry",
    "KnowledgeEntryCreate",
    "build_entry_document",
    "ActionResponse",
    "AskRequest",
]
