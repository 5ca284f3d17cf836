"""Code Mentor - caching, rate-limited relay between a coding-practice
browser extension and a generative model.

Layers:
    - protocols: Interface contracts (ResponseStore, ModelGateway)
    - repositories: In-memory response store, Gemini gateway
    - services: Key derivation, prompts, rate limiting, orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from code_mentor.api.app import create_app

    app = create_app()
    ```
"""

from code_mentor.config import Settings, get_settings, settings
from code_mentor.dto import MentorRequest, MentorResponse
from code_mentor.entities import Intent, MentorReplyEntity, MentorRequestEntity
from code_mentor.errors import ClientError, ConfigurationError, MentorError, RateLimited, UpstreamError
from code_mentor.handlers import MentorHandler
from code_mentor.protocols import ModelGateway, ResponseStore
from code_mentor.repositories import GeminiGateway, MemoryResponseStore
from code_mentor.services import MentorService, SlidingWindowRateLimiter, build_prompt, derive_key

__all__ = [
    # Configuration
    "Settings",
    "settings",
    "get_settings",
    # Errors
    "MentorError",
    "ClientError",
    "RateLimited",
    "ConfigurationError",
    "UpstreamError",
    # Protocols (interfaces)
    "ResponseStore",
    "ModelGateway",
    # Services (business logic)
    "MentorService",
    "SlidingWindowRateLimiter",
    "build_prompt",
    "derive_key",
    # Handlers (HTTP)
    "MentorHandler",
    # Repositories (data access)
    "MemoryResponseStore",
    "GeminiGateway",
    # Entities (domain models)
    "Intent",
    "MentorRequestEntity",
    "MentorReplyEntity",
    # DTOs (API contracts)
    "MentorRequest",
    "MentorResponse",
]
