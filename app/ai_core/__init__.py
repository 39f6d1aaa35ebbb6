# AI Core module

"""
AI Core Module - the assistant side of the dashboard.

Key responsibilities:
- Assistant prompts
- Completion gateway (prompt validation + chat-completion API call)
"""
