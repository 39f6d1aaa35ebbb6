"""
Configuration settings for the Streamlit application.
"""

import os

# Page configuration for Streamlit
PAGE_CONFIG = {
    "page_title": "Knowledge Desk - AI Assistant",
    "page_icon": "🤖",
    "layout": "wide",
    "initial_sidebar_state": "expanded",
}

# API Configuration
# Backend API port is configurable via PORT environment variable (default: 8001)
API_PORT = os.getenv("PORT", "8001")
API_BASE_URL = f"http://localhost:{API_PORT}"  # Backend API URL
API_TIMEOUT = 120  # seconds

# Chat Settings
MAX_QUESTION_LENGTH = 2000  # characters, enforced again by the backend

# Knowledge Base Settings
ANSWER_PREVIEW_LENGTH = 150  # characters shown before "Show more"
