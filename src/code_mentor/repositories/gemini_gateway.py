"""Gemini implementation of ModelGateway.

Talks to the Gemini ``generateContent`` REST endpoint:

    POST {base_url}/v1beta/models/{model}:generateContent
    x-goog-api-key: <GEMINI_API_KEY>
    {"contents": [{"parts": [{"text": "<prompt>"}]}]}

Each ``invoke`` makes exactly one request. Retrying is left to the caller,
and the relay does none.
"""

import logging
import time

import httpx

from code_mentor.config import settings
from code_mentor.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class GeminiGateway:
    """Gemini REST implementation of the ModelGateway protocol.

    This class satisfies the ModelGateway protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        gateway = GeminiGateway(api_key=settings.gemini_api_key)
        text = await gateway.invoke("Give me a hint for Two Sum.")
        await gateway.aclose()
        ```
    """

    def __init__(
        self,
        api_key: str | None,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini gateway.

        Args:
            api_key: Provider credential. None defers the failure to invoke().
            model_name: Gemini model. Defaults to settings.gemini_model.
            base_url: API base URL. Defaults to settings.gemini_base_url.
            timeout: Upstream timeout in seconds. Defaults to settings.gemini_timeout.
            client: Pre-built async client (tests pass one with a mock transport).
        """
        self._api_key = api_key
        self._model_name = model_name or settings.gemini_model
        self._base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self._timeout = settings.gemini_timeout if timeout is None else timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def model_name(self) -> str:
        return self._model_name

    async def invoke(self, prompt: str) -> str:
        """Generate mentor text for a prompt.

        Args:
            prompt: The full prompt text

        Returns:
            The text of the first candidate

        Raises:
            ConfigurationError: If GEMINI_API_KEY is not set
            UpstreamError: On transport errors, timeouts, non-2xx responses,
                or a response without candidate text
        """
        if not self._api_key:
            raise ConfigurationError("Missing GEMINI_API_KEY in environment")

        url = f"{self._base_url}/v1beta/models/{self._model_name}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self._api_key}

        start_time = time.perf_counter()
        try:
            response = await self.client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Gemini API timed out after {self._timeout:g}s") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Gemini API error: {e.response.status_code} {_error_message(e.response)}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Gemini API error: {e}") from e
        except ValueError as e:
            raise UpstreamError("Gemini API returned a non-JSON body") from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        text = _extract_text(data)
        if text is None:
            raise UpstreamError(f"Unexpected response format from Gemini: {_summarize(data)}")

        logger.info("Gemini %s responded in %.0f ms (%d chars)", self._model_name, elapsed_ms, len(text))
        return text

    async def aclose(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _extract_text(data: object) -> str | None:
    """Join the text parts of the first candidate, or None if there are none."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None
    texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
    if not texts:
        return None
    return "".join(texts)


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.reason_phrase


def _summarize(data: object) -> str:
    # promptFeedback carries the block reason when a prompt is refused
    if isinstance(data, dict) and "promptFeedback" in data:
        return f"promptFeedback={data['promptFeedback']}"
    text = repr(data)
    return text if len(text) <= 200 else text[:200] + "..."
