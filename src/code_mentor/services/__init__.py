"""Service layer for business logic.

This layer contains the relay's core logic: key derivation, prompt
construction, admission control and request orchestration. Services depend
on protocols (interfaces), not concrete implementations.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .cache_keys import derive_key
from .mentor_service import MentorService
from .prompt_builder import build_prompt, render_history
from .rate_limiter import SlidingWindowRateLimiter

__all__ = [
    "MentorService",
    "SlidingWindowRateLimiter",
    "build_prompt",
    "derive_key",
    "render_history",
]
