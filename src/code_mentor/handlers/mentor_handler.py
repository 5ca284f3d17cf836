"""HTTP handlers for mentoring.

Handlers convert between DTOs (API contracts) and service calls, and map the
error taxonomy onto HTTP status codes.
"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException

from code_mentor.dto import HealthCheckResponse, MentorRequest, MentorResponse
from code_mentor.errors import MentorError
from code_mentor.services import MentorService

logger = logging.getLogger(__name__)


class MentorHandler:
    """HTTP handlers for the mentor relay.

    Example:
        ```python
        handler = MentorHandler(mentor_service=service)

        @app.post("/mentor", response_model=MentorResponse)
        async def mentor(request: MentorRequest):
            return await handler.mentor(request)
        ```
    """

    def __init__(self, mentor_service: MentorService) -> None:
        """Initialize the mentor handler.

        Args:
            mentor_service: The mentor service for business logic (required).
        """
        self._mentor = mentor_service

    async def mentor(self, request: MentorRequest) -> MentorResponse:
        """Handle POST /mentor requests.

        Args:
            request: The mentor request DTO

        Returns:
            MentorResponse with the mentor text and cache flag

        Raises:
            HTTPException: 400 for blank fields, 500 for gateway or
                configuration failures
        """
        try:
            reply = await self._mentor.mentor(request.to_entity())
        except MentorError as e:
            if e.status_code >= 500:
                logger.error("[/mentor] %s: %s", type(e).__name__, e.message)
            raise HTTPException(status_code=e.status_code, detail=e.message) from e

        return MentorResponse(mentor_text=reply.mentor_text, from_cache=reply.from_cache)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        return HealthCheckResponse(
            status="ok",
            time=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        )
