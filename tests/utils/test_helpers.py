"""
Unit Tests for Utility Functions

Tests shared helper functions and input validators.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from datetime import timezone

from app.utils.helpers import normalize_tags, utc_now
from app.utils.validators import (
    MAX_QUESTION_LENGTH,
    validate_answer,
    validate_entry_id,
    validate_question,
    validate_tags,
)


def test_normalize_tags_empty():
    """Test normalize_tags with empty input."""
    assert normalize_tags(None) == []
    assert normalize_tags([]) == []


def test_normalize_tags_strips_and_dedupes():
    """Tags are trimmed, blanks dropped and duplicates removed in first-seen order."""
    assert normalize_tags([" policy ", "billing", "policy", "  "]) == ["policy", "billing"]


def test_utc_now_is_aware_and_millisecond_precise():
    """utc_now returns an aware UTC datetime without sub-millisecond digits."""
    now = utc_now()
    assert now.tzinfo == timezone.utc
    assert now.microsecond % 1000 == 0


def test_validate_question_empty():
    """Empty and whitespace-only questions are rejected."""
    assert validate_question("") == (False, "Question cannot be empty")
    assert validate_question("   \n") == (False, "Question cannot be empty")


def test_validate_question_length_limit():
    """Exactly MAX_QUESTION_LENGTH characters passes, one more fails."""
    assert validate_question("q" * MAX_QUESTION_LENGTH)[0] is True

    is_valid, message = validate_question("q" * (MAX_QUESTION_LENGTH + 1))
    assert is_valid is False
    assert "2000" in message


def test_validate_question_not_a_string():
    assert validate_question(None) == (False, "Question must be a string")
    assert validate_question(42)[0] is False


def test_validate_answer():
    assert validate_answer("Refunds within 30 days.")[0] is True
    assert validate_answer("") == (False, "Answer cannot be empty")
    assert validate_answer(None)[0] is False


def test_validate_tags():
    """Tags are optional but must be a list of strings when present."""
    assert validate_tags(None)[0] is True
    assert validate_tags([])[0] is True
    assert validate_tags(["a", "b"])[0] is True
    assert validate_tags("a, b") == (False, "Tags must be a list of strings")
    assert validate_tags(["a", 1])[0] is False


def test_validate_entry_id():
    assert validate_entry_id("65f1c2a9e4b0a1b2c3d4e5f6")[0] is True
    assert validate_entry_id("") == (False, "Invalid ID format")
    assert validate_entry_id("   ")[0] is False
    assert validate_entry_id(None)[0] is False
