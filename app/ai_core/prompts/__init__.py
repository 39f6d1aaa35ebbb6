"""Prompts package."""

from app.ai_core.prompts.assistant import ASSISTANT_SYSTEM_PROMPT

__all__ = [
    "ASSISTANT_SYSTEM_PROMPT",
]
