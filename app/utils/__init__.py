"""
Utility package exports
"""

from app.utils.helpers import normalize_tags, utc_now
from app.utils.validators import (
    validate_question,
    validate_answer,
    validate_tags,
    validate_entry_id,
    MAX_QUESTION_LENGTH,
)

__all__ = [
    "normalize_tags",
    "utc_now",
    "validate_question",
    "validate_answer",
    "validate_tags",
    "validate_entry_id",
    "MAX_QUESTION_LENGTH",
]
