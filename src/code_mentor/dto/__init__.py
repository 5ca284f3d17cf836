"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract, in the camelCase
field names the browser extension sends and expects.

Internal domain logic should use entities from the entities package.
"""

from .requests import MentorRequest
from .responses import ErrorResponse, HealthCheckResponse, MentorResponse

__all__ = [
    "MentorRequest",
    "MentorResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
