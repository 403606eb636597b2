from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum

QUESTION_TYPES = ("flashcard", "choice", "both")
SESSION_MODES = ("mixed", "sequential")
LANGUAGES = ("en", "es")

# Older clients send the original label for choice questions
_QUESTION_TYPE_ALIASES = {"multiple-choice": "choice"}


@dataclass(frozen=True)
class Concept:
    name: str
    description: str
    comparison: str = ""


@dataclass(frozen=True)
class GuideSection:
    title: str
    line: int
    id: str
    topic: str


@dataclass
class FlashcardQuestion:
    id: int
    concept: str
    description: str
    comparison: str
    card_type: str  # description | comparison
    topic: str | None = None

    def to_dict(self) -> dict:
        return {"type": "flashcard", **asdict(self)}


@dataclass
class ChoiceQuestion:
    id: int
    concept: str
    prompt: str
    correct_answer: str
    options: list[str]
    choice_type: str = "description"  # description | comparison
    topic: str | None = None

    def to_dict(self) -> dict:
        return {"type": "choice", **asdict(self)}


Question = FlashcardQuestion | ChoiceQuestion


class Phase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class AnswerRecord:
    question: Question
    is_correct: bool
    answered_at: datetime


@dataclass
class SessionState:
    questions: list[Question] = field(default_factory=list)
    current_index: int = 0
    answers: list[AnswerRecord] = field(default_factory=list)
    phase: Phase = Phase.NOT_STARTED
    revealed: bool = False
    started_at: datetime | None = None


@dataclass
class TopicStats:
    correct: int = 0
    total: int = 0
    pct: int = 0


@dataclass
class SessionReport:
    total_questions: int
    total_correct: int
    overall_score_pct: int
    per_topic: dict[str, TopicStats]
    recommendations: list[str]
    weak_topics: list[str] = field(default_factory=list)
    strong_topics: list[str] = field(default_factory=list)
    score_message: str = ""
    total_seconds: int = 0
    avg_seconds_per_question: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GenerationConfig:
    """What to build a session from.

    ``questions_per_topic`` caps how many concepts of each topic are turned
    into questions (``None`` = all of them).
    """

    topics: list[str] = field(default_factory=list)
    language: str = "en"
    questions_per_topic: int | None = None
    session_mode: str = "mixed"
    question_types: str = "both"

    def __post_init__(self):
        self.question_types = _QUESTION_TYPE_ALIASES.get(self.question_types, self.question_types)
        if self.question_types not in QUESTION_TYPES:
            raise ValueError(f"Unknown question types: {self.question_types!r}")
        if self.session_mode not in SESSION_MODES:
            raise ValueError(f"Unknown session mode: {self.session_mode!r}")
        if self.language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {self.language!r}")
        if self.questions_per_topic is not None and self.questions_per_topic < 1:
            raise ValueError("questions_per_topic must be at least 1")

    @property
    def wants_flashcards(self) -> bool:
        return self.question_types in ("flashcard", "both")

    @property
    def wants_choices(self) -> bool:
        return self.question_types in ("choice", "both")

    @property
    def report_topics(self) -> list[str] | None:
        """Selected topics for a per-topic report, or None when questions are untagged."""
        return list(self.topics) if len(self.topics) > 1 else None
