"""
Knowledge base sidebar component for the Streamlit app.
Searchable, pinned-first list of saved Q&A pairs with pin and delete actions.
"""
import streamlit as st

from config.settings import ANSWER_PREVIEW_LENGTH
from services import api_client
from state.app_state import AppState, StateAction
from utils.validators import format_created_at


@st.dialog("Delete Knowledge Base Item?")
def delete_dialog(state: AppState, item: dict):
    """Confirmation dialog shown before an entry is deleted."""
    st.markdown(
        f"Are you sure you want to delete “{item['question']}”? "
        "This action cannot be undone."
    )

    col_cancel, col_delete = st.columns(2)
    with col_cancel:
        if st.button("Cancel", key=f"delete_cancel_{item['id']}", use_container_width=True):
            st.rerun()
    with col_delete:
        if st.button(
            "Delete",
            key=f"delete_confirm_{item['id']}",
            type="primary",
            use_container_width=True,
        ):
            result = api_client.delete_knowledge_base_item(item["id"])
            if result["success"]:
                state.dispatch(StateAction.ENTRY_DELETED, item["id"])
                st.rerun()
            else:
                st.error(result["error"] or "Failed to delete knowledge base item")


def _render_item(state: AppState, item: dict):
    """Render one knowledge base entry as a bordered card."""
    with st.container(border=True):
        col_question, col_pin, col_delete = st.columns([6, 1, 1])
        with col_question:
            st.markdown(f"**{item['question']}**")
        with col_pin:
            if st.button(
                "📌" if item.get("is_pinned") else "📍",
                key=f"pin_btn_{item['id']}",
                help="Unpin" if item.get("is_pinned") else "Pin",
            ):
                result = api_client.toggle_pin_item(item["id"])
                if result["success"] and result["data"]:
                    state.dispatch(StateAction.ENTRY_UPDATED, result["data"])
                else:
                    st.session_state.knowledge_action_error = (
                        result["error"] or "Failed to toggle pin status"
                    )
                st.rerun()
        with col_delete:
            if st.button("🗑️", key=f"delete_btn_{item['id']}", help="Delete"):
                delete_dialog(state, item)

        badges = []
        if item.get("is_pinned"):
            badges.append(":orange[**Pinned**]")
        badges.extend(f"`{tag}`" for tag in item.get("tags") or [])
        if badges:
            st.markdown(" ".join(badges))

        answer = item.get("answer", "")
        if len(answer) > ANSWER_PREVIEW_LENGTH:
            st.caption(f"{answer[:ANSWER_PREVIEW_LENGTH]}...")
            with st.expander("Show more"):
                st.markdown(answer)
        else:
            st.markdown(answer)

        st.caption(format_created_at(item.get("created_at", "")))


def render_knowledge_section(state: AppState):
    """
    Render the knowledge base list in the sidebar.
    """
    with st.sidebar:
        st.markdown("### Knowledge Base")

        if state.knowledge_error:
            st.error(state.knowledge_error)
            return

        action_error = st.session_state.pop("knowledge_action_error", None)
        if action_error:
            st.error(action_error)

        query = st.text_input(
            "Search",
            placeholder="Search knowledge base...",
            key="knowledge_search",
            label_visibility="collapsed",
        )

        items = state.visible_items(query)
        if not items:
            if query:
                st.caption("No items found matching your search")
            else:
                st.caption(
                    "No saved items yet. Save answers from the chat to build your knowledge base."
                )
            return

        for item in items:
            _render_item(state, item)
