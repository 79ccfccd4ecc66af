"""Participant record and survey submission models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from teamate.personality import category_of, classify_personality, score_survey


PreferredRole = Literal["Strategist", "Defender", "Attacker", "Coordinator"]


class Participant(BaseModel):
    """One person on the roster. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    email: str
    game: str
    role: str
    skill: int = Field(..., ge=1, le=10)
    personality_score: int = Field(..., ge=0, le=100)
    personality_type: str

    @property
    def category(self) -> str:
        """Canonical personality category (Leader / Thinker / Balanced / Other)."""
        return category_of(self.personality_type)

    def describe(self) -> str:
        return (
            f"{self.id}:{self.name} ({self.game},{self.role},"
            f"skill={self.skill},{self.personality_type})"
        )


class SurveySubmission(BaseModel):
    """A self-registration: profile fields plus five survey answers."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$")
    game: str = Field(..., min_length=1)
    skill: int = Field(..., ge=1, le=10)
    role: PreferredRole
    answers: list[int] = Field(..., min_length=5, max_length=5)

    def to_participant(self) -> Participant:
        """Score the survey and build the resulting participant record."""
        score = score_survey(self.answers)
        return Participant(
            id=self.id,
            name=self.name,
            email=self.email,
            game=self.game,
            role=self.role,
            skill=self.skill,
            personality_score=score,
            personality_type=classify_personality(score),
        )
