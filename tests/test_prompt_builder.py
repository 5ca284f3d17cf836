"""Tests for intent-dispatched prompt construction."""

import pytest

from code_mentor.entities import Intent, MentorRequestEntity
from code_mentor.services import build_prompt, render_history

CODE = "vector<int> twoSum(vector<int>& nums, int target) { return {}; }"
QUESTION = "Given an array of integers nums and an integer target, return indices of the two numbers."


def make_request(intent: str | None, history: tuple[str, ...] = (), language: str = "C++") -> MentorRequestEntity:
    return MentorRequestEntity(
        user_code=CODE,
        question=QUESTION,
        intent=intent,
        history=history,
        language=language,
    )


@pytest.mark.parametrize("intent", [i.value for i in Intent] + ["refactor", "", None])
def test_every_intent_produces_a_prompt_with_the_code(intent):
    prompt = build_prompt(make_request(intent))
    assert prompt.strip()
    assert CODE in prompt


@pytest.mark.parametrize("intent", [i.value for i in Intent if i is not Intent.COMPLEXITY])
def test_prompts_echo_the_question(intent):
    assert QUESTION in build_prompt(make_request(intent))


def test_complexity_prompt_demands_two_line_format():
    prompt = build_prompt(make_request("complexity"))
    assert "Time Complexity: O(...)\nSpace Complexity: O(...)" in prompt
    assert "No other text" in prompt


def test_complete_code_prompt_targets_runnable_cpp_without_prose():
    prompt = build_prompt(make_request("complete_code_for_vscode", language="Python"))
    assert "C++" in prompt
    assert "main()" in prompt
    assert "only the code" in prompt


def test_hint_prompt_withholds_solution():
    prompt = build_prompt(make_request("hint"))
    assert "Do NOT give the full solution" in prompt


@pytest.mark.parametrize("intent", ["hint", "explain", "whatever"])
def test_history_context_included(intent):
    prompt = build_prompt(make_request(intent, history=("asked about sorting",)))
    assert "Turn 1: asked about sorting" in prompt


@pytest.mark.parametrize("intent", ["hint", "explain", None])
def test_absent_history_renders_none_marker(intent):
    assert "(none)" in build_prompt(make_request(intent))


def test_unknown_intent_uses_generic_fallback():
    assert build_prompt(make_request("refactor")) == build_prompt(make_request("generic"))
    assert "Intent was unspecified" in build_prompt(make_request(None))


def test_missing_language_is_labelled():
    assert "unknown language" in build_prompt(make_request("hint", language=""))
    assert "the appropriate language" in build_prompt(make_request("solution", language="  "))


def test_render_history_keeps_last_three_in_order():
    rendered = render_history(["t1", "t2", "t3", "t4", "t5"])
    assert rendered == "Turn 1: t3\nTurn 2: t4\nTurn 3: t5"


def test_render_history_empty():
    assert render_history([]) == "(none)"


def test_intent_parse():
    assert Intent.parse("explain") is Intent.EXPLAIN
    assert Intent.parse("nonsense") is Intent.GENERIC
    assert Intent.parse(None) is Intent.GENERIC
