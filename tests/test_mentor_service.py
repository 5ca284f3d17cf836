"""Tests for the mentoring request flow."""

import asyncio

import pytest

from code_mentor.entities import MentorRequestEntity
from code_mentor.errors import ClientError, UpstreamError
from code_mentor.repositories import MemoryResponseStore
from code_mentor.services import MentorService, derive_key

from .conftest import FakeGateway


@pytest.fixture
def store(clock) -> MemoryResponseStore:
    return MemoryResponseStore.create(ttl=60, clock=clock)


@pytest.fixture
def service(store, gateway) -> MentorService:
    return MentorService.create(store=store, gateway=gateway)


@pytest.fixture
def request_entity() -> MentorRequestEntity:
    return MentorRequestEntity(user_code="int x=1;", question="Two Sum", intent="hint", language="C++")


def test_miss_calls_gateway_and_stores(service, store, gateway, request_entity):
    reply = asyncio.run(service.mentor(request_entity))

    assert reply.from_cache is False
    assert len(gateway.prompts) == 1
    assert store.get(derive_key(request_entity)) == reply.mentor_text


def test_hit_skips_gateway(service, gateway, request_entity):
    first = asyncio.run(service.mentor(request_entity))
    second = asyncio.run(service.mentor(request_entity))

    assert second.from_cache is True
    assert second.mentor_text == first.mentor_text
    assert len(gateway.prompts) == 1


@pytest.mark.parametrize(
    "question, user_code, message",
    [
        ("", "int x;", "Missing problem description/question"),
        ("   ", "int x;", "Missing problem description/question"),
        ("Two Sum", "", "Missing user code"),
        ("Two Sum", " \n ", "Missing user code"),
        ("", "", "Missing problem description/question"),
    ],
)
def test_blank_fields_are_rejected(service, gateway, question, user_code, message):
    entity = MentorRequestEntity(user_code=user_code, question=question, intent="hint")

    with pytest.raises(ClientError, match=message):
        asyncio.run(service.mentor(entity))
    assert gateway.prompts == []


def test_failed_gateway_call_is_not_cached(store, request_entity):
    gateway = FakeGateway(fail_with=UpstreamError("down"))
    service = MentorService(store=store, gateway=gateway)

    with pytest.raises(UpstreamError):
        asyncio.run(service.mentor(request_entity))
    assert store.get(derive_key(request_entity)) is None
    assert len(store) == 0


def test_prompt_sent_matches_intent(service, gateway, request_entity):
    asyncio.run(service.mentor(request_entity))
    assert "patient and effective coding mentor" in gateway.prompts[0]


def test_concurrent_identical_misses_may_both_reach_gateway(store, request_entity):
    gateway = FakeGateway(delay=0.01)
    service = MentorService(store=store, gateway=gateway)

    async def both():
        return await asyncio.gather(service.mentor(request_entity), service.mentor(request_entity))

    replies = asyncio.run(both())

    assert [r.from_cache for r in replies] == [False, False]
    assert len(gateway.prompts) == 2
    assert store.get(derive_key(request_entity)) is not None
