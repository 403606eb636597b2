"""Turn parsed concepts into flashcards and multiple-choice questions."""
from __future__ import annotations

import logging
import math
import random
from collections.abc import Mapping, Sequence
from typing import TypeVar

from study_quiz.models import (
    ChoiceQuestion,
    Concept,
    FlashcardQuestion,
    GenerationConfig,
    Question,
)
from study_quiz.prompts import choice_prompt

_log = logging.getLogger("study_quiz.qgen")

T = TypeVar("T")

DISTRACTOR_COUNT = 3

# Minutes per question, by question type
PACE_MINUTES = {
    "flashcard": 0.5,
    "choice": 0.75,
    "both": 0.6,
}


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of *items* (Fisher-Yates)."""
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def reshuffle(questions: Sequence[Question], rng: random.Random | None = None) -> list[Question]:
    return shuffle(questions, rng)


def _pick_distractors(
    concept: Concept,
    pool: Sequence[Concept],
    field: str,
    rng: random.Random | None,
) -> list[str] | None:
    """Draw distinct wrong answers from the same field of sibling concepts.

    Returns None when the pool cannot supply DISTRACTOR_COUNT of them.
    """
    correct = getattr(concept, field)
    candidates = list(dict.fromkeys(
        getattr(c, field) for c in pool
        if c.name != concept.name and getattr(c, field) and getattr(c, field) != correct
    ))
    if len(candidates) < DISTRACTOR_COUNT:
        return None
    return (rng or random).sample(candidates, DISTRACTOR_COUNT)


def _choice_question(
    qid: int,
    concept: Concept,
    pool: Sequence[Concept],
    field: str,
    config: GenerationConfig,
    rng: random.Random | None,
    topic: str | None,
) -> ChoiceQuestion | None:
    distractors = _pick_distractors(concept, pool, field, rng)
    if distractors is None:
        _log.debug("Skipping %s choice for '%s': not enough distractors", field, concept.name)
        return None
    correct = getattr(concept, field)
    return ChoiceQuestion(
        id=qid,
        concept=concept.name,
        prompt=choice_prompt(concept.name, field, config.language),
        correct_answer=correct,
        options=shuffle([correct, *distractors], rng),
        choice_type=field,
        topic=topic,
    )


def generate_questions(
    concepts: Sequence[Concept],
    config: GenerationConfig,
    rng: random.Random | None = None,
    topic: str | None = None,
    start_id: int = 0,
) -> list[Question]:
    """Generate questions for one topic's concepts, in parse order.

    Only the first ``config.questions_per_topic`` concepts are asked about,
    but distractors are drawn from the whole list.
    """
    limit = config.questions_per_topic
    selected = concepts if limit is None else concepts[:limit]
    questions: list[Question] = []

    def next_id() -> int:
        return start_id + len(questions)

    for concept in selected:
        if not concept.description:
            continue

        if config.wants_flashcards:
            questions.append(FlashcardQuestion(
                id=next_id(),
                concept=concept.name,
                description=concept.description,
                comparison=concept.comparison,
                card_type="description",
                topic=topic,
            ))
            if concept.comparison:
                questions.append(FlashcardQuestion(
                    id=next_id(),
                    concept=concept.name,
                    description=concept.description,
                    comparison=concept.comparison,
                    card_type="comparison",
                    topic=topic,
                ))

        if config.wants_choices:
            fields = ["description"] + (["comparison"] if concept.comparison else [])
            for field in fields:
                q = _choice_question(next_id(), concept, concepts, field, config, rng, topic)
                if q:
                    questions.append(q)

    return questions


def generate_session_questions(
    concepts_by_topic: Mapping[str, Sequence[Concept]],
    config: GenerationConfig,
    rng: random.Random | None = None,
) -> list[Question]:
    """Build the question list for a whole session.

    A single topic yields untagged questions; several topics tag each
    question with its source. ``mixed`` sessions shuffle the combined list,
    ``sequential`` ones keep topics in selection order.
    """
    topics = list(config.topics) or list(concepts_by_topic)
    tag = len(topics) > 1
    questions: list[Question] = []

    for topic in topics:
        concepts = concepts_by_topic.get(topic) or []
        topic_questions = generate_questions(
            concepts, config, rng,
            topic=topic if tag else None,
            start_id=len(questions),
        )
        _log.info("Topic '%s': %d concepts -> %d questions", topic, len(concepts), len(topic_questions))
        questions.extend(topic_questions)

    if config.session_mode == "mixed":
        questions = shuffle(questions, rng)
    return questions


def estimate_session(topic_count: int, questions_per_topic: int, question_types: str) -> tuple[int, int]:
    """Return (total_questions, estimated_minutes) for a planned session."""
    total = topic_count * questions_per_topic
    minutes = math.ceil(total * PACE_MINUTES.get(question_types, PACE_MINUTES["both"]))
    return total, minutes
