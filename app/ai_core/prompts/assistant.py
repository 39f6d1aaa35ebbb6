"""
Prompts for the internal AI assistant chat.
"""

ASSISTANT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant for an internal team. "
    "Provide clear, concise, and actionable answers."
)
