"""Quiz session state machine.

A QuizSession owns one SessionState and moves it through
NOT_STARTED -> IN_PROGRESS -> COMPLETE.  Nothing is shared between
sessions, so any number of them can run side by side.
"""
from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from study_quiz.errors import InvalidSessionError
from study_quiz.models import (
    AnswerRecord,
    ChoiceQuestion,
    FlashcardQuestion,
    Phase,
    Question,
    SessionReport,
    SessionState,
)
from study_quiz.question_generator import reshuffle
from study_quiz.report import aggregate

_log = logging.getLogger("study_quiz.session")


class QuizSession:
    def __init__(self, rng: random.Random | None = None, session_id: str | None = None):
        self.id = session_id or uuid.uuid4().hex
        self.state = SessionState()
        self._rng = rng

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_complete(self) -> bool:
        return self.state.phase is Phase.COMPLETE

    def _require_in_progress(self, action: str) -> None:
        if self.state.phase is not Phase.IN_PROGRESS:
            raise InvalidSessionError(
                f"Cannot {action}: session {self.id} is {self.state.phase.value}"
            )

    def start(self, questions: Sequence[Question]) -> None:
        if self.state.phase is not Phase.NOT_STARTED:
            raise InvalidSessionError(
                f"Cannot start: session {self.id} is {self.state.phase.value}"
            )
        if not questions:
            raise InvalidSessionError("Cannot start a session without questions")

        self.state = SessionState(
            questions=list(questions),
            current_index=0,
            answers=[],
            phase=Phase.IN_PROGRESS,
            started_at=datetime.now(timezone.utc),
        )
        _log.info("Session %s started with %d questions", self.id, len(questions))

    def current_question(self) -> Question | None:
        if self.state.phase is not Phase.IN_PROGRESS:
            return None
        return self.state.questions[self.state.current_index]

    def reveal_answer(self) -> None:
        """Show the back of the current flashcard. Choice questions ignore this."""
        self._require_in_progress("reveal answer")
        if isinstance(self.current_question(), FlashcardQuestion):
            self.state.revealed = True

    def submit_answer(self, is_correct: bool, answered_at: datetime | None = None) -> AnswerRecord:
        self._require_in_progress("submit answer")
        state = self.state
        record = AnswerRecord(
            question=state.questions[state.current_index],
            is_correct=bool(is_correct),
            answered_at=answered_at or datetime.now(timezone.utc),
        )
        state.answers.append(record)
        state.current_index += 1
        state.revealed = False

        if state.current_index == len(state.questions):
            state.phase = Phase.COMPLETE
            correct = sum(1 for a in state.answers if a.is_correct)
            _log.info("Session %s complete: %d/%d correct", self.id, correct, len(state.answers))
        return record

    def answer_choice(self, option: str, answered_at: datetime | None = None) -> AnswerRecord:
        """Judge a selected option of the current choice question and submit it."""
        self._require_in_progress("answer")
        question = self.current_question()
        if not isinstance(question, ChoiceQuestion):
            raise InvalidSessionError("The current question is a flashcard, not a choice question")
        return self.submit_answer(option == question.correct_answer, answered_at)

    def restart(self, with_reshuffle: bool = False) -> None:
        """Run the same questions again, optionally in a new order."""
        questions = self.state.questions
        if with_reshuffle:
            questions = reshuffle(questions, self._rng)
        self.state = SessionState()
        self.start(questions)

    def progress(self) -> dict:
        state = self.state
        return {
            "current": min(state.current_index + 1, len(state.questions)),
            "total": len(state.questions),
            "answered": len(state.answers),
            "correct": sum(1 for a in state.answers if a.is_correct),
            "remaining": len(state.questions) - state.current_index,
            "phase": state.phase.value,
            "revealed": state.revealed,
        }

    def topics(self) -> list[str]:
        """Topics of the session's questions, in first-seen order."""
        return list(dict.fromkeys(q.topic for q in self.state.questions if q.topic))

    def report(self, topics: Sequence[str] | None = None, language: str = "en") -> SessionReport:
        return aggregate(
            self.state.answers,
            self.topics() if topics is None else topics,
            language=language,
            started_at=self.state.started_at,
        )
