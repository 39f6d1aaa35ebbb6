"""
Main Streamlit application for Knowledge Desk.
Chat with the AI assistant in the main area; the knowledge base lives in the sidebar.
"""
import streamlit as st
from components.chat_section import render_chat_section
from components.knowledge_section import render_knowledge_section
from config.settings import PAGE_CONFIG
from services import api_client
from state.app_state import AppState, StateAction


def get_state() -> AppState:
    """
    Return the session's AppState, creating it on first render.
    """
    if "app_state" not in st.session_state:
        st.session_state.app_state = AppState()
    return st.session_state.app_state


def load_knowledge_base(state: AppState):
    """
    Load the knowledge base once per session; later changes are patched locally.
    """
    if state.knowledge_loaded:
        return

    with st.spinner("Loading knowledge base..."):
        result = api_client.get_knowledge_base()

    if result["success"]:
        state.dispatch(StateAction.LOAD_KNOWLEDGE, result["data"] or [])
    else:
        state.dispatch(
            StateAction.LOAD_KNOWLEDGE_FAILED,
            result["error"] or "Failed to load knowledge base",
        )


def main():
    """
    Main application entry point.
    """
    # Configure the page
    st.set_page_config(**PAGE_CONFIG)

    # Apply custom CSS
    st.markdown("""
        <style>
        /* Hide Streamlit default elements but keep sidebar toggle */
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        [data-testid="stDecoration"] {display: none;}

        .block-container {
            padding-top: 1rem;
            max-width: 100%;
        }

        .app-title {
            font-size: 2rem;
            font-weight: 700;
            margin-bottom: 0;
        }

        .app-subtitle {
            color: #666;
            margin-bottom: 1rem;
        }

        [data-testid="stSidebar"] {
            min-width: 380px;
        }
        </style>
    """, unsafe_allow_html=True)

    state = get_state()

    # App header
    st.markdown("""
        <div>
            <p class="app-title">Knowledge Desk</p>
            <p class="app-subtitle">Ask the AI assistant and save useful answers</p>
        </div>
    """, unsafe_allow_html=True)

    load_knowledge_base(state)

    render_knowledge_section(state)
    render_chat_section(state)


if __name__ == "__main__":
    main()
