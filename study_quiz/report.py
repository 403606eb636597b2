"""Reduce answer records into a session report."""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from datetime import datetime

from study_quiz.models import AnswerRecord, SessionReport, TopicStats
from study_quiz.prompts import format_recommendation, score_message
from study_quiz.topics import TOPIC_NAMES

IMPROVE_BELOW = 70
STRENGTH_FROM = 80

_log = logging.getLogger("study_quiz.report")


def percent(correct: int, total: int) -> int:
    """Whole percentage, rounding halves up; 0 when there is nothing to score."""
    if total == 0:
        return 0
    return math.floor(100 * correct / total + 0.5)


def aggregate(
    answers: Sequence[AnswerRecord],
    topics: Sequence[str],
    language: str = "en",
    topic_names: Mapping[str, str] | None = None,
    started_at: datetime | None = None,
) -> SessionReport:
    names = TOPIC_NAMES if topic_names is None else topic_names
    total = len(answers)
    correct = sum(1 for a in answers if a.is_correct)

    per_topic: dict[str, TopicStats] = {}
    for topic in topics:
        tagged = [a for a in answers if a.question.topic == topic]
        hits = sum(1 for a in tagged if a.is_correct)
        per_topic[topic] = TopicStats(correct=hits, total=len(tagged), pct=percent(hits, len(tagged)))

    # sorted() is stable, so equal scores keep the caller's topic order
    stats = list(per_topic.items())
    weak = [t for t, s in sorted(stats, key=lambda ts: ts[1].pct) if s.pct < IMPROVE_BELOW]
    strong = [t for t, s in sorted(stats, key=lambda ts: -ts[1].pct) if s.pct >= STRENGTH_FROM]

    recommendations = []
    if weak:
        recommendations.append(format_recommendation("improve", [names.get(t, t) for t in weak], language))
    if strong:
        recommendations.append(format_recommendation("strength", [names.get(t, t) for t in strong], language))

    total_seconds = 0
    if started_at is not None and answers:
        total_seconds = max(0, round((answers[-1].answered_at - started_at).total_seconds()))

    overall = percent(correct, total)
    _log.debug("Report: %d/%d correct over %d topics", correct, total, len(per_topic))
    return SessionReport(
        total_questions=total,
        total_correct=correct,
        overall_score_pct=overall,
        per_topic=per_topic,
        recommendations=recommendations,
        weak_topics=weak,
        strong_topics=strong,
        score_message=score_message(overall, language),
        total_seconds=total_seconds,
        avg_seconds_per_question=round(total_seconds / total, 1) if total else 0.0,
    )
