"""Shared fixtures: a manual clock, a recording gateway and a wired test app."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from code_mentor.api.app import create_app
from code_mentor.config import Settings
from code_mentor.errors import UpstreamError

COMPLEXITY_REPLY = "Time Complexity: O(n)\nSpace Complexity: O(1)"


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway:
    """ModelGateway that records prompts instead of calling a provider."""

    def __init__(self, fail_with: Exception | None = None, delay: float = 0.0) -> None:
        self.prompts: list[str] = []
        self.fail_with = fail_with
        self.delay = delay
        self.closed = False

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        if "time complexity analyzer" in prompt:
            return COMPLEXITY_REPLY
        return f"mentor reply #{len(self.prompts)}"

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gemini_api_key="test-key",
        cache_ttl=60,
        cache_check_period=120,
        rate_limit_window=10,
        rate_limit_max=10,
        allowed_origins=(),
    )


@pytest.fixture
def app(settings, gateway, clock):
    return create_app(settings=settings, gateway=gateway, clock=clock)


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def mentor_body() -> dict:
    return {
        "userCode": "int x=1;",
        "question": "Two Sum",
        "intent": "hint",
        "history": [],
        "language": "C++",
    }


@pytest.fixture
def failing_gateway() -> FakeGateway:
    return FakeGateway(fail_with=UpstreamError("Gemini API error: 503 overloaded"))
