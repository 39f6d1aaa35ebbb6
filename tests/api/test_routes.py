"""
Tests for the HTTP routes.

The application is built with create_app() and the request handlers are
swapped in through FastAPI dependency overrides, so the lifespan (and its
required settings) never runs.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import uuid
from unittest.mock import AsyncMock, MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from app.ai_core.completion import CompletionGateway
from app.api.dependencies import get_actions
from app.config import Settings
from app.integrations.mongodb import KnowledgeRepository, MongoStore
from app.main import create_app
from app.services.actions import DashboardActions


@pytest.fixture
def client():
    settings = Settings(
        _env_file=None,
        openai_api_key="sk-test",
        mongodb_uri="mongodb://localhost:27017",
        mongodb_db="knowledge_desk_test",
    )
    store = MongoStore(
        uri=settings.mongodb_uri,
        db_name=f"kb_test_{uuid.uuid4().hex}",
        client_factory=lambda uri, **kwargs: mongomock.MongoClient(uri, tz_aware=True),
    )
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="Refunds are issued within 30 days."))
    actions = DashboardActions(
        repository=KnowledgeRepository(store),
        gateway=CompletionGateway(settings, llm=llm),
    )

    app = create_app(settings)
    app.dependency_overrides[get_actions] = lambda: actions
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ask(client):
    response = client.post("/api/assistant/ask", json={"question": "What is our refund policy?"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": "Refunds are issued within 30 days."}


def test_ask_empty_question(client):
    response = client.post("/api/assistant/ask", json={"question": ""})

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Question cannot be empty"}


def test_malformed_body_returns_envelope(client):
    response = client.post(
        "/api/assistant/ask",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"]


def test_knowledge_crud_flow(client):
    created = client.post(
        "/api/knowledge",
        json={
            "question": "What is our refund policy?",
            "answer": "Refunds are issued within 30 days.",
            "tags": ["billing"],
        },
    ).json()
    assert created["success"] is True
    entry = created["data"]
    assert entry["is_pinned"] is False
    assert entry["tags"] == ["billing"]
    assert "error" not in created

    listed = client.get("/api/knowledge").json()
    assert [item["id"] for item in listed["data"]] == [entry["id"]]

    toggled = client.post(f"/api/knowledge/{entry['id']}/toggle-pin").json()
    assert toggled["success"] is True
    assert toggled["data"]["is_pinned"] is True

    deleted = client.delete(f"/api/knowledge/{entry['id']}").json()
    assert deleted == {"success": True}

    assert client.get("/api/knowledge").json() == {"success": True, "data": []}


def test_delete_nonexistent_id(client):
    response = client.delete("/api/knowledge/nonexistent-id")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Knowledge base item not found"}


def test_save_missing_answer(client):
    response = client.post("/api/knowledge", json={"question": "Q?"})

    assert response.json() == {"success": False, "error": "Answer must be a string"}
