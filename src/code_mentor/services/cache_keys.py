"""Idempotency keys for mentoring requests."""

import json

from code_mentor.entities import MentorRequestEntity


def derive_key(request: MentorRequestEntity) -> str:
    """Derive the cache key for a request.

    The key is a compact JSON object with a fixed field order, so identical
    content (with history truncated to its trailing window) always yields the
    same key and any differing field yields a different one. The raw intent
    tag is used, not its parsed form.
    """
    return json.dumps(
        {
            "userCode": request.user_code,
            "question": request.question,
            "intent": request.intent,
            "language": request.language,
            "history": list(request.recent_history),
        },
        ensure_ascii=False,
        separators=(",", ":"),
    )
