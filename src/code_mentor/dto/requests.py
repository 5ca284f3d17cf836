"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from code_mentor.entities import MentorRequestEntity


class MentorRequest(BaseModel):
    """Request DTO for POST /mentor.

    Missing fields take the defaults the extension relies on. Blank
    ``question``/``userCode`` are accepted here and rejected by the service
    with a readable message.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_code: str = Field("", alias="userCode", description="Code from the user's editor")
    question: str = Field("", description="The problem statement")
    intent: str | None = Field(
        "hint",
        description="hint | explain | solution | complexity | complete_code_for_vscode; anything else is generic",
    )
    history: list[str] = Field(
        default_factory=list,
        description="Prior conversation turns, most recent last (only the last 3 are used)",
    )
    language: str = Field("", description="Free-form language label, e.g. 'C++'")

    @field_validator("history", mode="before")
    @classmethod
    def _null_history_is_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("language", mode="before")
    @classmethod
    def _null_language_is_unknown(cls, value: object) -> object:
        return "" if value is None else value

    def to_entity(self) -> MentorRequestEntity:
        return MentorRequestEntity(
            user_code=self.user_code,
            question=self.question,
            intent=self.intent,
            history=tuple(self.history),
            language=self.language,
        )
