"""
Client-side application state for the Streamlit app.

One AppState object lives in st.session_state for the browser session. It is
changed only through AppState.dispatch(), so every transition of the chat
transcript and the knowledge base snapshot goes through one audited path.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ChatMessage:
    """A transient chat message (never persisted on its own)."""

    role: ChatRole
    content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)


class StateAction(str, Enum):
    """Explicit state transitions."""

    # Chat transcript
    SEND_QUESTION = "send_question"  # payload: question text
    RECEIVE_ANSWER = "receive_answer"  # payload: answer text
    ASK_FAILED = "ask_failed"  # payload: error message
    CLEAR_CHAT = "clear_chat"

    # Knowledge base snapshot
    LOAD_KNOWLEDGE = "load_knowledge"  # payload: list of entries
    LOAD_KNOWLEDGE_FAILED = "load_knowledge_failed"  # payload: error message
    ENTRY_SAVED = "entry_saved"  # payload: {"entry": dict, "message_id": str}
    ENTRY_DELETED = "entry_deleted"  # payload: entry id
    ENTRY_UPDATED = "entry_updated"  # payload: updated entry dict

    # Inline errors
    SET_ERROR = "set_error"  # payload: error message
    CLEAR_ERROR = "clear_error"


def _created_at_key(item: Dict[str, Any]) -> float:
    """Sort key for an entry's creation time (API returns ISO 8601 strings)."""
    value = item.get("created_at")
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
        except ValueError:
            logger.warning(f"Unparseable created_at: {value!r}")
    return 0.0


def sort_with_pinned_first(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Pinned entries first, each group by descending creation time.

    The sort is stable, so entries with equal creation times keep their
    original relative order.
    """
    return sorted(
        items,
        key=lambda item: (not item.get("is_pinned", False), -_created_at_key(item)),
    )


def filter_items(items: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    """Case-insensitive substring search over question, answer and tags."""
    query = (query or "").strip().lower()
    if not query:
        return list(items)

    def matches(item: Dict[str, Any]) -> bool:
        if query in (item.get("question") or "").lower():
            return True
        if query in (item.get("answer") or "").lower():
            return True
        return any(query in tag.lower() for tag in item.get("tags") or [])

    return [item for item in items if matches(item)]


@dataclass
class AppState:
    """Chat transcript, knowledge base snapshot and UI flags."""

    messages: List[ChatMessage] = field(default_factory=list)
    knowledge_items: List[Dict[str, Any]] = field(default_factory=list)
    knowledge_loaded: bool = False
    is_asking: bool = False
    pending_question: Optional[str] = None
    error: Optional[str] = None
    knowledge_error: Optional[str] = None
    saved_message_ids: set = field(default_factory=set)

    def dispatch(self, action: StateAction, payload: Any = None) -> None:
        """Apply one state transition."""
        handler = self._handlers().get(StateAction(action))
        if handler is None:
            raise ValueError(f"Unknown state action: {action}")
        logger.debug(f"dispatch {action}")
        handler(payload)

    def _handlers(self) -> Dict[StateAction, Callable[[Any], None]]:
        return {
            StateAction.SEND_QUESTION: self._send_question,
            StateAction.RECEIVE_ANSWER: self._receive_answer,
            StateAction.ASK_FAILED: self._ask_failed,
            StateAction.CLEAR_CHAT: self._clear_chat,
            StateAction.LOAD_KNOWLEDGE: self._load_knowledge,
            StateAction.LOAD_KNOWLEDGE_FAILED: self._load_knowledge_failed,
            StateAction.ENTRY_SAVED: self._entry_saved,
            StateAction.ENTRY_DELETED: self._entry_deleted,
            StateAction.ENTRY_UPDATED: self._entry_updated,
            StateAction.SET_ERROR: self._set_error,
            StateAction.CLEAR_ERROR: self._clear_error,
        }

    # ── chat transcript ───────────────────────────────────────────────

    def _send_question(self, question: str) -> None:
        if self.is_asking:
            # One ask in flight at a time
            return
        question = question.strip()
        self.messages.append(ChatMessage(role=ChatRole.USER, content=question))
        self.pending_question = question
        self.is_asking = True
        self.error = None

    def _receive_answer(self, answer: str) -> None:
        self.messages.append(ChatMessage(role=ChatRole.ASSISTANT, content=answer))
        self.pending_question = None
        self.is_asking = False

    def _ask_failed(self, message: str) -> None:
        # The user's message stays in the transcript
        self.error = message or "Failed to get response from AI assistant"
        self.pending_question = None
        self.is_asking = False

    def _clear_chat(self, _payload: Any = None) -> None:
        self.messages = []
        self.saved_message_ids = set()
        self.pending_question = None
        self.is_asking = False
        self.error = None

    # ── knowledge base snapshot ───────────────────────────────────────

    def _load_knowledge(self, entries: List[Dict[str, Any]]) -> None:
        self.knowledge_items = list(entries or [])
        self.knowledge_loaded = True
        self.knowledge_error = None

    def _load_knowledge_failed(self, message: str) -> None:
        self.knowledge_loaded = True
        self.knowledge_error = message or "Failed to load knowledge base"

    def _entry_saved(self, payload: Dict[str, Any]) -> None:
        self.knowledge_items = [payload["entry"]] + self.knowledge_items
        if payload.get("message_id"):
            self.saved_message_ids.add(payload["message_id"])

    def _entry_deleted(self, entry_id: str) -> None:
        self.knowledge_items = [i for i in self.knowledge_items if i.get("id") != entry_id]

    def _entry_updated(self, entry: Dict[str, Any]) -> None:
        self.knowledge_items = [
            {**item, "is_pinned": entry.get("is_pinned", False), "updated_at": entry.get("updated_at")}
            if item.get("id") == entry.get("id")
            else item
            for item in self.knowledge_items
        ]

    # ── inline errors ─────────────────────────────────────────────────

    def _set_error(self, message: str) -> None:
        self.error = message

    def _clear_error(self, _payload: Any = None) -> None:
        self.error = None

    # ── derived views ─────────────────────────────────────────────────

    def sorted_with_pinned_first(self) -> List[Dict[str, Any]]:
        return sort_with_pinned_first(self.knowledge_items)

    def visible_items(self, query: str = "") -> List[Dict[str, Any]]:
        """Pinned-first ordering, filtered by the search query."""
        return filter_items(self.sorted_with_pinned_first(), query)

    def question_for(self, message_id: str) -> Optional[str]:
        """
        Return the user question an assistant message answers.

        Only the immediately preceding message counts, and only if it is a
        user message; otherwise None.
        """
        for index, message in enumerate(self.messages):
            if message.id != message_id:
                continue
            if message.role != ChatRole.ASSISTANT or index == 0:
                return None
            previous = self.messages[index - 1]
            if previous.role != ChatRole.USER:
                return None
            return previous.content
        return None

    def is_saved(self, message_id: str) -> bool:
        return message_id in self.saved_message_ids

    def can_save(self, message_id: str) -> bool:
        """An answer can be saved once, and only when it pairs with a user question."""
        return self.question_for(message_id) is not None and not self.is_saved(message_id)
