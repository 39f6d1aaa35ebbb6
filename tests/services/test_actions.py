"""
Tests for the dashboard request handlers.

Handlers run against a mongomock-backed repository and a gateway whose chat
model is mocked; every outcome must come back as an ActionResponse envelope.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import mongomock
import pytest
from langchain_core.messages import AIMessage
from pymongo.errors import ServerSelectionTimeoutError

from app.ai_core.completion import CompletionGateway
from app.config import Settings
from app.integrations.mongodb import KnowledgeRepository, MongoStore
from app.models.api_responses import ActionResponse
from app.services.actions import DashboardActions


def make_settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        mongodb_uri="mongodb://localhost:27017",
        mongodb_db="knowledge_desk_test",
    )


def make_actions(answer="Refunds are issued within 30 days.", client_factory=None, llm_error=None):
    if client_factory is None:
        client_factory = lambda uri, **kwargs: mongomock.MongoClient(uri, tz_aware=True)

    store = MongoStore(
        uri="mongodb://localhost:27017",
        db_name=f"kb_test_{uuid.uuid4().hex}",
        client_factory=client_factory,
    )
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=answer), side_effect=llm_error)

    actions = DashboardActions(
        repository=KnowledgeRepository(store),
        gateway=CompletionGateway(make_settings(), llm=llm),
    )
    return actions, llm


@pytest.fixture
def actions():
    actions, _ = make_actions()
    return actions


def test_ask_then_save_scenario(actions):
    """Ask a question, then save the exchange to the knowledge base."""
    question = "What is our refund policy?"

    asked = asyncio.run(actions.ask_assistant(question))
    assert asked.success is True
    assert asked.data == "Refunds are issued within 30 days."
    assert asked.error is None

    saved = asyncio.run(actions.save_to_knowledge_base(question, asked.data))
    assert saved.success is True
    assert saved.data.question == question
    assert saved.data.answer == asked.data
    assert saved.data.is_pinned is False

    listed = asyncio.run(actions.get_knowledge_base())
    assert listed.success is True
    assert [entry.id for entry in listed.data] == [saved.data.id]


def test_ask_empty_question():
    actions, llm = make_actions()

    result = asyncio.run(actions.ask_assistant(""))

    assert isinstance(result, ActionResponse)
    assert result.success is False
    assert result.error == "Question cannot be empty"
    assert result.data is None
    llm.ainvoke.assert_not_called()


def test_ask_empty_completion():
    actions, _ = make_actions(answer="")

    result = asyncio.run(actions.ask_assistant("Hello?"))

    assert result.success is False
    assert result.error == "No response from AI assistant"


def test_ask_gateway_error_is_enveloped():
    actions, _ = make_actions(llm_error=RuntimeError("Incorrect API key provided"))

    result = asyncio.run(actions.ask_assistant("Hello?"))

    assert result.success is False
    assert "Incorrect API key provided" in result.error


def test_delete_nonexistent_id_leaves_list_unchanged(actions):
    asyncio.run(actions.save_to_knowledge_base("Q?", "A."))
    before = asyncio.run(actions.get_knowledge_base()).data

    result = asyncio.run(actions.delete_knowledge_base_item("nonexistent-id"))

    assert result.success is False
    assert "not found" in result.error
    after = asyncio.run(actions.get_knowledge_base()).data
    assert [e.id for e in after] == [e.id for e in before]


def test_delete_then_delete_again(actions):
    saved = asyncio.run(actions.save_to_knowledge_base("Q?", "A.")).data

    first = asyncio.run(actions.delete_knowledge_base_item(saved.id))
    second = asyncio.run(actions.delete_knowledge_base_item(saved.id))

    assert first.success is True
    assert first.data is None
    assert second.success is False
    assert second.error == "Knowledge base item not found"


def test_toggle_pin_twice(actions):
    saved = asyncio.run(actions.save_to_knowledge_base("Q?", "A.")).data

    once = asyncio.run(actions.toggle_pin_item(saved.id))
    twice = asyncio.run(actions.toggle_pin_item(saved.id))

    assert once.success is True and once.data.is_pinned is True
    assert twice.success is True and twice.data.is_pinned is False


def test_invalid_ids_are_enveloped(actions):
    assert asyncio.run(actions.delete_knowledge_base_item("")).error == "Invalid ID format"
    assert asyncio.run(actions.toggle_pin_item("")).error == "Invalid ID format"


def test_save_validation_errors(actions):
    result = asyncio.run(actions.save_to_knowledge_base("Q?", "", None))
    assert result.success is False
    assert result.error == "Answer cannot be empty"

    result = asyncio.run(actions.save_to_knowledge_base("Q?", "A.", "tag"))
    assert result.success is False
    assert result.error == "Tags must be a list of strings"


def test_store_unavailable_is_enveloped():
    def broken_factory(uri, **kwargs):
        raise ServerSelectionTimeoutError("connection refused")

    actions, _ = make_actions(client_factory=broken_factory)

    for result in (
        asyncio.run(actions.get_knowledge_base()),
        asyncio.run(actions.save_to_knowledge_base("Q?", "A.")),
        asyncio.run(actions.delete_knowledge_base_item("65f1c2a9e4b0a1b2c3d4e5f6")),
        asyncio.run(actions.toggle_pin_item("65f1c2a9e4b0a1b2c3d4e5f6")),
    ):
        assert result.success is False
        assert "connection refused" in result.error


def test_unexpected_error_uses_fallback_message(actions):
    actions.repository.list = AsyncMock(side_effect=KeyError("boom"))

    result = asyncio.run(actions.get_knowledge_base())

    assert result.success is False
    assert result.error == "Failed to fetch knowledge base"
