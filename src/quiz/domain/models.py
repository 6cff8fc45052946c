from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.config import AppConfig


# --- Enums ---
class ScoreBand(str, Enum):
    PERFECT = "Perfect"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_WORK = "Needs Work"

    @classmethod
    def for_fraction(cls, fraction: float) -> "ScoreBand":
        """Lower bounds are inclusive, upper bounds exclusive."""
        if fraction >= 1.0:
            return cls.PERFECT
        if fraction >= AppConfig.EXCELLENT_THRESHOLD:
            return cls.EXCELLENT
        if fraction >= AppConfig.GOOD_THRESHOLD:
            return cls.GOOD
        if fraction >= AppConfig.FAIR_THRESHOLD:
            return cls.FAIR
        return cls.NEEDS_WORK

    @property
    def message(self) -> str:
        return _BAND_MESSAGES[self]


_BAND_MESSAGES = {
    ScoreBand.PERFECT: "Perfect! 🏆",
    ScoreBand.EXCELLENT: "Excellent work! 🎉",
    ScoreBand.GOOD: "Good job! 👍",
    ScoreBand.FAIR: "Not bad, keep practicing.",
    ScoreBand.NEEDS_WORK: "Needs work. Try again! 📚",
}


# --- Entities ---
class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    answers: tuple[str, ...] = Field(..., min_length=2)
    correct_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _correct_index_in_range(self) -> "Question":
        if self.correct_index >= len(self.answers):
            raise ValueError(
                f"correct_index {self.correct_index} outside 0..{len(self.answers) - 1}"
            )
        return self

    @property
    def correct_answer(self) -> str:
        return self.answers[self.correct_index]


class Topic(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    questions: tuple[Question, ...] = Field(..., min_length=1)
    icon: str = AppConfig.DEFAULT_ICON

    @property
    def total(self) -> int:
        return len(self.questions)


# --- (Data Transfer Object) ---
@dataclass(frozen=True)
class ScoreSummary:
    score: int
    total: int
    band: ScoreBand

    @property
    def percent(self) -> int:
        return int(self.score / self.total * 100) if self.total else 0

    @property
    def message(self) -> str:
        return self.band.message
