"""
Dashboard Request Handlers

Thin wrappers that compose the completion gateway and the knowledge base
repository and return the uniform ActionResponse envelope:
1. Ask the AI assistant a question
2. Save a Q&A pair to the knowledge base
3. List knowledge base entries
4. Delete a knowledge base entry
5. Toggle the pinned status of an entry

No exception crosses this boundary: expected failures keep their message,
anything else is logged and replaced by a per-operation fallback message.
"""

import logging
from typing import Any, List, Optional

from app.ai_core.completion import CompletionGateway
from app.integrations.mongodb import KnowledgeRepository
from app.models.api_responses import ActionResponse
from app.models.knowledge import KnowledgeEntry
from app.services.errors import DashboardError

logger = logging.getLogger(__name__)


class DashboardActions:
    """
    Request handlers for the chat and knowledge base panes.
    """

    def __init__(self, repository: KnowledgeRepository, gateway: CompletionGateway):
        self.repository = repository
        self.gateway = gateway

    async def ask_assistant(self, question: Any) -> ActionResponse[str]:
        """Ask the AI assistant a question."""
        try:
            answer = await self.gateway.ask(question)
            return ActionResponse[str].ok(answer)
        except DashboardError as e:
            logger.warning(f"ask_assistant failed: {e.message}")
            return ActionResponse[str].fail(e.message)
        except Exception as e:
            logger.error(f"Error in ask_assistant: {e}", exc_info=True)
            return ActionResponse[str].fail("Failed to get response from AI assistant")

    async def save_to_knowledge_base(
        self, question: Any, answer: Any, tags: Optional[Any] = None
    ) -> ActionResponse[KnowledgeEntry]:
        """Save a Q&A pair to the knowledge base."""
        try:
            entry = await self.repository.create(question, answer, tags)
            return ActionResponse[KnowledgeEntry].ok(entry)
        except DashboardError as e:
            logger.warning(f"save_to_knowledge_base failed: {e.message}")
            return ActionResponse[KnowledgeEntry].fail(e.message)
        except Exception as e:
            logger.error(f"Error in save_to_knowledge_base: {e}", exc_info=True)
            return ActionResponse[KnowledgeEntry].fail(
                "Failed to save to knowledge base"
            )

    async def get_knowledge_base(self) -> ActionResponse[List[KnowledgeEntry]]:
        """Get all knowledge base entries, most recent first."""
        try:
            entries = await self.repository.list()
            return ActionResponse[List[KnowledgeEntry]].ok(entries)
        except DashboardError as e:
            logger.warning(f"get_knowledge_base failed: {e.message}")
            return ActionResponse[List[KnowledgeEntry]].fail(e.message)
        except Exception as e:
            logger.error(f"Error in get_knowledge_base: {e}", exc_info=True)
            return ActionResponse[List[KnowledgeEntry]].fail(
                "Failed to fetch knowledge base"
            )

    async def delete_knowledge_base_item(self, entry_id: Any) -> ActionResponse[None]:
        """Delete a knowledge base entry by id."""
        try:
            await self.repository.delete(entry_id)
            return ActionResponse[None].ok()
        except DashboardError as e:
            logger.warning(f"delete_knowledge_base_item failed: {e.message}")
            return ActionResponse[None].fail(e.message)
        except Exception as e:
            logger.error(f"Error in delete_knowledge_base_item: {e}", exc_info=True)
            return ActionResponse[None].fail("Failed to delete knowledge base item")

    async def toggle_pin_item(self, entry_id: Any) -> ActionResponse[KnowledgeEntry]:
        """Toggle the pinned status of a knowledge base entry."""
        try:
            entry = await self.repository.toggle_pin(entry_id)
            return ActionResponse[KnowledgeEntry].ok(entry)
        except DashboardError as e:
            logger.warning(f"toggle_pin_item failed: {e.message}")
            return ActionResponse[KnowledgeEntry].fail(e.message)
        except Exception as e:
            logger.error(f"Error in toggle_pin_item: {e}", exc_info=True)
            return ActionResponse[KnowledgeEntry].fail("Failed to toggle pin status")
