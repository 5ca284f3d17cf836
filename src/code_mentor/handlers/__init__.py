"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .mentor_handler import MentorHandler

__all__ = [
    "MentorHandler",
]
