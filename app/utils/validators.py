"""
Input validation for questions, answers, tags and entry ids.

Each validator returns a (is_valid, message) tuple; callers decide whether a
failed check becomes an exception or an inline UI message.
"""

from typing import Any

MAX_QUESTION_LENGTH = 2000


def validate_question(question: Any) -> tuple[bool, str]:
    """
    Validate a question / prompt.

    Args:
        question: The raw question text

    Returns:
        tuple: (is_valid, message)
    """
    if not isinstance(question, str):
        return False, "Question must be a string"

    question = question.strip()
    if not question:
        return False, "Question cannot be empty"

    if len(question) > MAX_QUESTION_LENGTH:
        return False, f"Question must be at most {MAX_QUESTION_LENGTH} characters"

    return True, "Valid question."


def validate_answer(answer: Any) -> tuple[bool, str]:
    """Validate an answer before it is saved to the knowledge base."""
    if not isinstance(answer, str):
        return False, "Answer must be a string"

    if not answer.strip():
        return False, "Answer cannot be empty"

    return True, "Valid answer."


def validate_tags(tags: Any) -> tuple[bool, str]:
    """
    Validate optional tags.

    Args:
        tags: None or a list of strings

    Returns:
        tuple: (is_valid, message)
    """
    if tags is None:
        return True, "No tags."

    if not isinstance(tags, list):
        return False, "Tags must be a list of strings"

    if not all(isinstance(tag, str) for tag in tags):
        return False, "Tags must be a list of strings"

    return True, "Valid tags."


def validate_entry_id(entry_id: Any) -> tuple[bool, str]:
    """Validate a knowledge base entry id (non-empty string)."""
    if not isinstance(entry_id, str) or not entry_id.strip():
        return False, "Invalid ID format"

    return True, "Valid ID."
