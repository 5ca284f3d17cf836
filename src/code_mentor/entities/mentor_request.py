"""Mentoring request domain entity."""

from dataclasses import dataclass, field
from enum import Enum

# Only the trailing turns of a conversation reach the key and the prompt.
HISTORY_WINDOW = 3


class Intent(str, Enum):
    """What the user asked the mentor to do."""

    HINT = "hint"
    EXPLAIN = "explain"
    SOLUTION = "solution"
    COMPLEXITY = "complexity"
    COMPLETE_CODE_FOR_VSCODE = "complete_code_for_vscode"
    GENERIC = "generic"

    @classmethod
    def parse(cls, raw: str | None) -> "Intent":
        """Map a raw intent tag to an Intent, falling back to GENERIC."""
        if raw is None:
            return cls.GENERIC
        try:
            return cls(raw)
        except ValueError:
            return cls.GENERIC


@dataclass(frozen=True)
class MentorRequestEntity:
    """Domain entity for one mentoring request.

    Attributes:
        user_code: The code currently in the user's editor
        question: The problem statement
        intent: Raw intent tag as sent by the client (may be unrecognised)
        history: Prior conversation turns, most recent last
        language: Free-form language label, empty when unknown
    """

    user_code: str
    question: str
    intent: str | None = None
    history: tuple[str, ...] = field(default_factory=tuple)
    language: str = ""

    @property
    def recent_history(self) -> tuple[str, ...]:
        """The last HISTORY_WINDOW turns, oldest first."""
        return self.history[-HISTORY_WINDOW:]

    @property
    def parsed_intent(self) -> Intent:
        return Intent.parse(self.intent)
