"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

logger = logging.getLogger(__name__)


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """
    Normalize tags into an ordered, de-duplicated list of labels.

    Labels are trimmed, blank labels dropped and duplicates removed,
    keeping first-seen order. None becomes an empty list.
    """
    result = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in result:
            result.append(tag)

    return result


def utc_now() -> datetime:
    """
    Current UTC time truncated to milliseconds.

    MongoDB stores datetimes with millisecond precision.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
