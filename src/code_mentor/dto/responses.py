"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class MentorResponse(BaseModel):
    """Response DTO for POST /mentor."""

    model_config = ConfigDict(populate_by_name=True)

    mentor_text: str = Field(..., alias="mentorText", description="The mentor's reply")
    from_cache: bool = Field(..., alias="fromCache", description="Whether the reply was served from cache")


class ErrorResponse(BaseModel):
    """Error envelope shared by every non-2xx response."""

    error: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Always 'ok' while the process serves requests")
    time: str = Field(..., description="Current server time, ISO-8601 UTC")
