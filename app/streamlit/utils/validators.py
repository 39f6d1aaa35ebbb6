"""
Validation and parsing utilities for UI input.
"""
from datetime import datetime

from config.settings import MAX_QUESTION_LENGTH


def validate_question(question: str) -> tuple[bool, str]:
    """
    Check a chat question before it is sent to the backend.

    Args:
        question: The text typed by the user

    Returns:
        tuple: (is_valid, message)
    """
    if not question or not question.strip():
        return False, "Question cannot be empty"

    if len(question.strip()) > MAX_QUESTION_LENGTH:
        return False, f"Question must be at most {MAX_QUESTION_LENGTH} characters"

    return True, "Valid question."


def parse_tags(raw: str) -> list[str]:
    """
    Split a comma-separated tag string into labels.

    Args:
        raw: User input such as "billing, policy"

    Returns:
        list: Trimmed, non-empty, de-duplicated tags in input order
    """
    tags = []
    for part in (raw or "").split(","):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def format_created_at(value: str) -> str:
    """
    Format an ISO 8601 timestamp as e.g. "Nov 4, 2025".

    Returns the input unchanged when it cannot be parsed.
    """
    try:
        parsed = datetime.fromisoformat((value or "").replace("Z", "+00:00"))
    except ValueError:
        return value or ""
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"
