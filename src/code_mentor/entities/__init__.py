"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .mentor_reply import MentorReplyEntity
from .mentor_request import HISTORY_WINDOW, Intent, MentorRequestEntity
from .rate_limit_decision import RateLimitDecision

__all__ = [
    "CacheEntryEntity",
    "HISTORY_WINDOW",
    "Intent",
    "MentorReplyEntity",
    "MentorRequestEntity",
    "RateLimitDecision",
]
