"""Request-scoped error taxonomy.

Every error raised while serving a mentoring request derives from
``MentorError`` and carries the HTTP status it is surfaced as. None of them
is cached and none of them stops the relay.
"""

from fastapi import status


class MentorError(Exception):
    """Base class for errors surfaced to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientError(MentorError):
    """A required field is missing or blank. Not retried."""

    status_code = status.HTTP_400_BAD_REQUEST


class RateLimited(MentorError):
    """The calling address exceeded its admission window."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, message: str = "Too many requests, slow down.", retry_after: float = 0.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class ConfigurationError(MentorError):
    """No provider credential is configured. Needs operator intervention."""


class UpstreamError(MentorError):
    """The model provider failed or returned an unexpected shape."""
