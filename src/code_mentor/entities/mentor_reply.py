"""Mentor reply domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MentorReplyEntity:
    """Text returned to the user and whether it came from the cache."""

    mentor_text: str
    from_cache: bool
