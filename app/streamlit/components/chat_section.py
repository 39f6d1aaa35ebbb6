"""
Chat section component for the Streamlit app.
Renders the transcript, the "Save to KB" actions and the input bar.
"""

import logging
import re

import streamlit as st
import streamlit.components.v1 as components

from services import api_client
from state.app_state import AppState, ChatMessage, ChatRole, StateAction
from utils.validators import parse_tags, validate_question

# Configure logger for this module
logger = logging.getLogger(__name__)


# ── save-to-KB dialog (requires Streamlit >= 1.37) ────────────────────
@st.dialog("Save to Knowledge Base")
def save_dialog(state: AppState, message_id: str):
    """Pop-up dialog collecting optional tags before saving a Q&A pair."""
    question = state.question_for(message_id)
    answer = next((m.content for m in state.messages if m.id == message_id), None)

    if question is None or answer is None:
        st.error("This answer has no preceding question to pair it with.")
        return

    st.markdown(f"**Question:** {question}")
    tags_raw = st.text_input(
        "Tags (optional)",
        placeholder="billing, policy",
        key=f"save_tags_{message_id}",
    )

    if st.button("Save", type="primary", key=f"save_confirm_{message_id}"):
        result = api_client.save_to_knowledge_base(question, answer, parse_tags(tags_raw))
        if result["success"] and result["data"]:
            state.dispatch(
                StateAction.ENTRY_SAVED,
                {"entry": result["data"], "message_id": message_id},
            )
            st.rerun()
        else:
            st.error(result["error"] or "Failed to save to knowledge base")


# ── helper: inject real JS via a zero-height iframe ────────────────────
def _inject_keyboard_shortcuts_js():
    """Use components.html to run JS that handles Command+Enter for sending messages."""
    js = """
    <script>
    (function() {
        function setupKeyboardShortcuts() {
            var doc = window.parent.document;
            var textarea = doc.querySelector('textarea[aria-label="Question"]');
            if (!textarea) {
                setTimeout(setupKeyboardShortcuts, 300);
                return;
            }

            if (textarea._keydownHandler) {
                textarea.removeEventListener('keydown', textarea._keydownHandler);
            }

            textarea._keydownHandler = function(e) {
                if (e.key === 'Enter' && (e.metaKey || e.ctrlKey)) {
                    e.preventDefault();
                    var buttons = doc.querySelectorAll('button');
                    for (var i = 0; i < buttons.length; i++) {
                        if (buttons[i].textContent.includes('ASK') && !buttons[i].disabled) {
                            buttons[i].click();
                            break;
                        }
                    }
                }
            };
            textarea.addEventListener('keydown', textarea._keydownHandler);
        }

        setupKeyboardShortcuts();

        // Re-setup on DOM changes (handles Streamlit re-renders)
        var observer = new MutationObserver(setupKeyboardShortcuts);
        observer.observe(window.parent.document.body, {
            childList: true,
            subtree: true
        });
    })();
    </script>
    """
    components.html(js, height=0, scrolling=False)


def _render_message(state: AppState, message: ChatMessage):
    """Render one transcript message with its timestamp and actions."""
    with st.chat_message(message.role.value):
        content = message.content
        if message.role == ChatRole.USER:
            # Preserve single newlines as hard line breaks in Markdown.
            content = re.sub(r"(?<!\n)\n(?!\n)", "  \n", content)
        st.markdown(content)

        caption = message.timestamp.strftime("%I:%M %p").lstrip("0")
        if message.role != ChatRole.ASSISTANT:
            st.caption(caption)
            return

        col_time, col_save = st.columns([4, 1])
        with col_time:
            st.caption(caption)
        with col_save:
            if st.button(
                "Saved" if state.is_saved(message.id) else "Save to KB",
                key=f"save_btn_{message.id}",
                disabled=not state.can_save(message.id),
                use_container_width=True,
            ):
                save_dialog(state, message.id)


# ── main render function ───────────────────────────────────────────────
def render_chat_section(state: AppState):
    """
    Render chat history and the input bar.

    Asking is two-phase: the click appends the user message and reruns, the
    next render calls the backend under a spinner. While a request is pending
    the ASK button is disabled.
    """
    header_col, new_chat_col = st.columns([5, 1])
    with header_col:
        st.subheader("AI Assistant")
    with new_chat_col:
        if st.button(
            "New chat",
            key="new_chat_btn",
            use_container_width=True,
            disabled=state.is_asking or not state.messages,
        ):
            state.dispatch(StateAction.CLEAR_CHAT)
            st.rerun()

    chat_container = st.container(height=520, border=False, key="chat_history")
    with chat_container:
        if not state.messages:
            st.info("Ask a question to get started")

        for message in state.messages:
            _render_message(state, message)

        # Phase two: the user message is already shown, now fetch the answer
        if state.is_asking and state.pending_question:
            with st.chat_message("assistant"):
                with st.spinner("Thinking..."):
                    result = api_client.ask_assistant(state.pending_question)
            if result["success"] and result["data"]:
                state.dispatch(StateAction.RECEIVE_ANSWER, result["data"])
            else:
                state.dispatch(
                    StateAction.ASK_FAILED,
                    result["error"] or "Failed to get response from AI assistant",
                )
            st.rerun()

    if state.error:
        st.error(state.error)

    # ── input bar ──────────────────────────────────────────────────────
    if "chat_input_key" not in st.session_state:
        st.session_state.chat_input_key = 0

    col_input, col_btn = st.columns([6, 1])
    with col_input:
        user_input = st.text_area(
            "Question",
            height=100,
            placeholder="Ask a question... (Cmd/Ctrl+Enter to send)",
            key=f"chat_input_area_{st.session_state.chat_input_key}",
            label_visibility="collapsed",
            disabled=state.is_asking,
        )
    with col_btn:
        ask_clicked = st.button(
            "Sending..." if state.is_asking else "ASK",
            key="ask_btn",
            use_container_width=True,
            type="primary",
            disabled=state.is_asking,
        )

    _inject_keyboard_shortcuts_js()

    # Phase one: show the user message immediately and set the pending state
    if ask_clicked and not state.is_asking:
        is_valid, message = validate_question(user_input)
        if not is_valid:
            state.dispatch(StateAction.SET_ERROR, message)
            st.rerun()

        state.dispatch(StateAction.SEND_QUESTION, user_input)
        st.session_state.chat_input_key += 1
        st.rerun()
