"""Prompt construction for the mentor.

``build_prompt`` dispatches on the parsed intent through ``_BUILDERS``, one
function per Intent member. Unrecognised or missing intents parse to
``Intent.GENERIC`` and get the fallback prompt.
"""

from collections.abc import Callable, Sequence

from code_mentor.entities import HISTORY_WINDOW, Intent, MentorRequestEntity

# Target language for code handed off to the local editor.
EDITOR_TARGET_LANGUAGE = "C++"

NO_HISTORY = "(none)"


def render_history(history: Sequence[str]) -> str:
    """Render the trailing turns as a numbered transcript.

    Args:
        history: Conversation turns, most recent last

    Returns:
        ``Turn 1: ...`` lines for the last turns, or ``(none)``
    """
    recent = list(history)[-HISTORY_WINDOW:]
    if not recent:
        return NO_HISTORY
    return "\n".join(f"Turn {i}: {turn}" for i, turn in enumerate(recent, start=1))


def _code_block(code: str) -> str:
    return f"```\n{code}\n```"


def _language_label(request: MentorRequestEntity, default: str = "unknown language") -> str:
    return request.language.strip() or default


def _complete_code_prompt(request: MentorRequestEntity) -> str:
    return f"""You are a coding assistant. The user wants a complete, ready-to-run {EDITOR_TARGET_LANGUAGE} solution for a LeetCode problem, including:
1. The class Solution
2. A main() function
3. Proper input/output handling using cin/cout
4. Any necessary includes and using namespace std

Problem description:
{request.question}

User's code (may be partial):
{_code_block(request.user_code)}

Generate the full {EDITOR_TARGET_LANGUAGE} code, ready to copy-paste and run. Do NOT include explanations, only the code. Make sure main() reads input and prints output as expected for LeetCode problems.
"""


def _hint_prompt(request: MentorRequestEntity) -> str:
    return f"""You are a patient and effective coding mentor. The user is solving a LeetCode problem.

Problem description:
{request.question}

User's code ({_language_label(request)}):
{_code_block(request.user_code)}

The user is stuck and wants a small hint to help debug or proceed. Do NOT give the full solution unless they explicitly ask for "solution".
Your response should:
1. Briefly summarize what the code seems to be trying to do.
2. Give one specific, minimal actionable hint to move forward (e.g., what to check, a subtle edge case, a likely logic bug).
3. If needed, ask a clarifying question to narrow the issue.

Conversation history (for context):
{render_history(request.history)}
"""


def _explain_prompt(request: MentorRequestEntity) -> str:
    return f"""You are reviewing the user's code for a LeetCode problem.

Problem description:
{request.question}

User's code ({_language_label(request)}):
{_code_block(request.user_code)}

Provide:
1. A concise summary of the time and space complexity and whether it's optimal.
2. Any logical issues or edge cases missed.
3. One suggestion to improve clarity or performance (no full rewrite unless the user asks for "refactor").

Conversation history:
{render_history(request.history)}
"""


def _complexity_prompt(request: MentorRequestEntity) -> str:
    return f"""You are a time complexity analyzer. Analyze the following code and provide ONLY the time and space complexity in Big O notation.

User's code ({_language_label(request)}):
{_code_block(request.user_code)}

Respond with ONLY the complexity in this exact format:
Time Complexity: O(...)
Space Complexity: O(...)

No other text or explanations should be included.
"""


def _solution_prompt(request: MentorRequestEntity) -> str:
    return f"""The user explicitly requested the full solution. Provide a clear, idiomatic implementation in {_language_label(request, "the appropriate language")}.

Problem:
{request.question}

User's code:
{_code_block(request.user_code)}

Instructions:
1. Explain the core idea in 2-3 sentences.
2. Then give the full working solution with comments, clearly labeled as the full solution.
3. If there are variations or complexity trade-offs, briefly mention them.
"""


def _generic_prompt(request: MentorRequestEntity) -> str:
    return f"""Assist the user on this LeetCode problem.

Problem:
{request.question}

User code:
{_code_block(request.user_code)}

Intent was unspecified. Provide a helpful starting hint.

Conversation history:
{render_history(request.history)}
"""


_BUILDERS: dict[Intent, Callable[[MentorRequestEntity], str]] = {
    Intent.COMPLETE_CODE_FOR_VSCODE: _complete_code_prompt,
    Intent.HINT: _hint_prompt,
    Intent.EXPLAIN: _explain_prompt,
    Intent.COMPLEXITY: _complexity_prompt,
    Intent.SOLUTION: _solution_prompt,
    Intent.GENERIC: _generic_prompt,
}

_missing = set(Intent) - set(_BUILDERS)
if _missing:
    raise RuntimeError(f"No prompt builder for intents: {sorted(i.value for i in _missing)}")


def build_prompt(request: MentorRequestEntity) -> str:
    """Build the model prompt for a mentoring request.

    Args:
        request: A validated mentoring request

    Returns:
        The prompt text for the request's intent
    """
    return _BUILDERS[request.parsed_intent](request)
