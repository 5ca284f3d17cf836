"""Model gateway protocol.

Defines the interface for the only component that talks to the
generative-model provider.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ModelGateway(Protocol):
    """Protocol for generative-model backends.

    One call to ``invoke`` performs at most one outbound request. There is
    no internal retry.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def invoke(self, prompt: str) -> str:
        """Send a prompt and return the model's text.

        Args:
            prompt: The full prompt text

        Returns:
            The generated text

        Raises:
            ConfigurationError: If no provider credential is configured
            UpstreamError: If the provider call fails or returns no text
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the gateway."""
        ...
