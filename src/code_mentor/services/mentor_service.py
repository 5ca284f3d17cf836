"""Mentor service for the relay's request flow.

Coordinates key derivation, the response store, prompt construction and the
model gateway for one request:

    validate -> derive key -> cache lookup -> (miss) build prompt
             -> invoke gateway -> store -> reply

Admission control happens before this service is reached (see
``code_mentor.api.middleware``).
"""

import logging

from code_mentor.entities import MentorReplyEntity, MentorRequestEntity
from code_mentor.errors import ClientError
from code_mentor.protocols import ModelGateway, ResponseStore

from .cache_keys import derive_key
from .prompt_builder import build_prompt

logger = logging.getLogger(__name__)


class MentorService:
    """Core mentoring orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ResponseStore: in-memory TTL store by default
    - ModelGateway: Gemini by default, a fake in tests

    Concurrent requests with the same key may both miss and both reach the
    gateway; the later ``set`` simply overwrites the earlier one.

    Example:
        ```python
        service = MentorService.create(
            store=MemoryResponseStore.create(),
            gateway=GeminiGateway(api_key=settings.gemini_api_key),
        )
        reply = await service.mentor(request)
        ```
    """

    def __init__(self, store: ResponseStore, gateway: ModelGateway) -> None:
        """Initialize the mentor service.

        Args:
            store: Response cache (required).
            gateway: Model provider gateway (required).
        """
        self._store = store
        self._gateway = gateway

    @classmethod
    def create(cls, store: ResponseStore, gateway: ModelGateway) -> "MentorService":
        """Factory method mirroring the other services' constructors."""
        return cls(store=store, gateway=gateway)

    @staticmethod
    def validate(request: MentorRequestEntity) -> None:
        """Reject requests without a question or code.

        Raises:
            ClientError: If question or user_code is blank
        """
        if not request.question.strip():
            raise ClientError("Missing problem description/question")
        if not request.user_code.strip():
            raise ClientError("Missing user code")

    async def mentor(self, request: MentorRequestEntity) -> MentorReplyEntity:
        """Answer a mentoring request, from cache when possible.

        Args:
            request: The incoming request

        Returns:
            MentorReplyEntity with the text and whether it was cached

        Raises:
            ClientError: If the request is missing its question or code
            ConfigurationError: If the gateway has no credential
            UpstreamError: If the gateway call fails
        """
        self.validate(request)

        key = derive_key(request)
        cached = self._store.get(key)
        if cached is not None:
            logger.info("Cache hit (intent=%s)", request.intent)
            return MentorReplyEntity(mentor_text=cached, from_cache=True)

        logger.info("Cache miss (intent=%s), calling %s", request.intent, self._gateway.model_name)
        prompt = build_prompt(request)
        logger.debug("Prompt:\n%s", prompt)

        # Failures propagate before anything is stored.
        mentor_text = await self._gateway.invoke(prompt)

        self._store.set(key, mentor_text)
        return MentorReplyEntity(mentor_text=mentor_text, from_cache=False)

    @property
    def gateway(self) -> ModelGateway:
        """Get the underlying gateway (for testing)."""
        return self._gateway
