"""
API client for the Knowledge Desk backend.
Makes real HTTP calls to the FastAPI backend at app/api/routes.

Every function returns the backend envelope as a dict:
    {"success": bool, "data": ..., "error": str | None}
Transport failures are converted into the same shape.
"""

from typing import Any
import requests
import logging
from config.settings import API_BASE_URL, API_TIMEOUT

logger = logging.getLogger(__name__)


def _extract_error_detail(e: requests.HTTPError) -> str:
    """Pull a human-readable message from an HTTPError response."""
    try:
        body = e.response.json()
        return body.get("error") or body.get("detail") or str(e)
    except Exception:
        return str(e)


def _failure(message: str) -> dict[str, Any]:
    return {"success": False, "data": None, "error": message}


def _envelope(resp: requests.Response) -> dict[str, Any]:
    """Normalize a backend response into the envelope dict."""
    resp.raise_for_status()
    data = resp.json()
    return {
        "success": bool(data.get("success", False)),
        "data": data.get("data"),
        "error": data.get("error"),
    }


def _request(method: str, endpoint: str, json: dict | None = None) -> dict[str, Any]:
    """Make a request to the backend API and return the envelope."""
    url = f"{API_BASE_URL}{endpoint}"
    try:
        resp = requests.request(method, url, json=json, timeout=API_TIMEOUT)
        return _envelope(resp)
    except requests.ConnectionError:
        logger.warning(f"Cannot connect to backend API at {API_BASE_URL}")
        return _failure("Cannot connect to backend API. Is it running?")
    except requests.Timeout:
        return _failure("The backend took too long to respond.")
    except requests.HTTPError as e:
        detail = _extract_error_detail(e)
        logger.error(f"{method} {endpoint} failed: {detail}")
        return _failure(detail)
    except Exception as e:
        logger.error(f"Unexpected error calling {method} {endpoint}: {e}")
        return _failure(f"Unexpected error: {e}")


# ── Assistant ─────────────────────────────────────────────────────────


def ask_assistant(question: str) -> dict[str, Any]:
    """
    Ask the AI assistant a question.

    Calls: POST /api/assistant/ask

    Returns:
        Envelope with the answer text in `data`.
    """
    return _request("POST", "/api/assistant/ask", json={"question": question})


# ── Knowledge base ────────────────────────────────────────────────────


def get_knowledge_base() -> dict[str, Any]:
    """
    Fetch all knowledge base entries (most recent first).

    Calls: GET /api/knowledge
    """
    return _request("GET", "/api/knowledge")


def save_to_knowledge_base(
    question: str, answer: str, tags: list[str] | None = None
) -> dict[str, Any]:
    """
    Save a Q&A pair to the knowledge base.

    Calls: POST /api/knowledge

    Returns:
        Envelope with the persisted entry in `data`.
    """
    payload = {"question": question, "answer": answer}
    if tags:
        payload["tags"] = tags
    return _request("POST", "/api/knowledge", json=payload)


def delete_knowledge_base_item(entry_id: str) -> dict[str, Any]:
    """
    Delete a knowledge base entry.

    Calls: DELETE /api/knowledge/{id}
    """
    return _request("DELETE", f"/api/knowledge/{entry_id}")


def toggle_pin_item(entry_id: str) -> dict[str, Any]:
    """
    Toggle the pinned status of a knowledge base entry.

    Calls: POST /api/knowledge/{id}/toggle-pin

    Returns:
        Envelope with the updated entry in `data`.
    """
    return _request("POST", f"/api/knowledge/{entry_id}/toggle-pin")
