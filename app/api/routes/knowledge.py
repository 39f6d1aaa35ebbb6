"""
Knowledge Base API Routes

GET    /api/knowledge                 - List all entries (most recent first)
POST   /api/knowledge                 - Save a Q&A pair
DELETE /api/knowledge/{id}            - Delete an entry
POST   /api/knowledge/{id}/toggle-pin - Toggle the pinned status of an entry
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from app.api.dependencies import get_actions
from app.models.api_responses import ActionResponse
from app.models.knowledge import KnowledgeEntry, KnowledgeEntryCreate
from app.services.actions import DashboardActions

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=ActionResponse[List[KnowledgeEntry]],
    response_model_exclude_none=True,
)
async def list_entries(actions: DashboardActions = Depends(get_actions)):
    """List all knowledge base entries, most recent first."""
    return await actions.get_knowledge_base()


@router.post(
    "",
    response_model=ActionResponse[KnowledgeEntry],
    response_model_exclude_none=True,
)
async def create_entry(
    request: KnowledgeEntryCreate, actions: DashboardActions = Depends(get_actions)
):
    """
    Save a Q&A pair to the knowledge base.

    Example request body:
    ```json
    {
        "question": "What is our refund policy?",
        "answer": "Refunds are issued within 30 days of purchase.",
        "tags": ["billing", "policy"]
    }
    ```
    """
    logger.info("Save to knowledge base request")
    return await actions.save_to_knowledge_base(
        request.question, request.answer, request.tags
    )


@router.delete(
    "/{entry_id}",
    response_model=ActionResponse[None],
    response_model_exclude_none=True,
)
async def delete_entry(entry_id: str, actions: DashboardActions = Depends(get_actions)):
    """Delete a knowledge base entry by id."""
    logger.info(f"Delete request: entry_id={entry_id}")
    return await actions.delete_knowledge_base_item(entry_id)


@router.post(
    "/{entry_id}/toggle-pin",
    response_model=ActionResponse[KnowledgeEntry],
    response_model_exclude_none=True,
)
async def toggle_pin(entry_id: str, actions: DashboardActions = Depends(get_actions)):
    """Toggle the pinned status of a knowledge base entry."""
    logger.info(f"Toggle pin request: entry_id={entry_id}")
    return await actions.toggle_pin_item(entry_id)
