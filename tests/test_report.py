"""Tests for report aggregation."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from study_quiz.models import AnswerRecord, FlashcardQuestion, TopicStats
from study_quiz.report import aggregate, percent

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _answers(*pairs):
    """Build records from (topic, is_correct) pairs, one second apart."""
    records = []
    for i, (topic, ok) in enumerate(pairs):
        q = FlashcardQuestion(i, f"C{i}", "d", "", "description", topic=topic)
        records.append(AnswerRecord(q, ok, T0 + timedelta(seconds=i + 1)))
    return records


class TestPercent:
    def test_zero_total(self):
        assert percent(0, 0) == 0

    def test_round_half_up(self):
        assert percent(1, 8) == 13  # 12.5
        assert percent(5, 8) == 63  # 62.5
        assert percent(2, 3) == 67
        assert percent(1, 3) == 33


class TestAggregate:
    def test_empty(self):
        report = aggregate([], ["a", "b"])

        assert report.total_questions == 0
        assert report.total_correct == 0
        assert report.overall_score_pct == 0
        assert report.per_topic == {"a": TopicStats(0, 0, 0), "b": TopicStats(0, 0, 0)}

    def test_two_of_three(self):
        report = aggregate(_answers(("A", True), ("A", True), ("A", False)), ["A"])

        assert report.per_topic["A"] == TopicStats(correct=2, total=3, pct=67)
        assert report.overall_score_pct == 67

    def test_per_topic_only_counts_tagged(self):
        answers = _answers(("A", True), ("B", False), (None, True))
        report = aggregate(answers, ["A", "B"])

        assert report.per_topic["A"] == TopicStats(1, 1, 100)
        assert report.per_topic["B"] == TopicStats(0, 1, 0)
        assert report.total_questions == 3
        assert report.total_correct == 2

    def test_idempotent(self):
        answers = _answers(("A", True), ("B", False))
        assert aggregate(answers, ["A", "B"]) == aggregate(answers, ["A", "B"])

    def test_does_not_mutate_answers(self):
        answers = _answers(("A", True))
        aggregate(answers, ["A"])
        assert len(answers) == 1


class TestRecommendations:
    def test_weak_and_strong(self):
        answers = _answers(
            ("react", True), ("react", True), ("react", True), ("react", True),  # 100
            ("git", False), ("git", True),                                       # 50
            ("node", True), ("node", True), ("node", True), ("node", False),     # 75
        )
        report = aggregate(answers, ["react", "git", "node"])

        assert report.weak_topics == ["git"]
        assert report.strong_topics == ["react"]
        assert report.recommendations == [
            "Focus more on: Git",
            "Great job with: React",
        ]

    def test_middle_band_in_neither(self):
        answers = _answers(("node", True), ("node", True), ("node", True), ("node", False))
        report = aggregate(answers, ["node"])

        assert report.weak_topics == []
        assert report.strong_topics == []
        assert report.recommendations == []

    def test_boundaries(self):
        # 7/10 = 70 is not weak, 8/10 = 80 is strong
        answers = _answers(*([("a", True)] * 7 + [("a", False)] * 3 + [("b", True)] * 8 + [("b", False)] * 2))
        report = aggregate(answers, ["a", "b"])

        assert report.weak_topics == []
        assert report.strong_topics == ["b"]

    def test_ordering(self):
        answers = _answers(
            ("a", False), ("a", True),                     # 50
            ("b", False),                                  # 0
            ("c", True), ("c", True), ("c", True), ("c", True), ("c", False),  # 80
            ("d", True),                                   # 100
        )
        report = aggregate(answers, ["a", "b", "c", "d"])

        assert report.weak_topics == ["b", "a"]
        assert report.strong_topics == ["d", "c"]

    def test_unanswered_topic_is_weak(self):
        report = aggregate(_answers(("a", True)), ["a", "b"])
        assert report.weak_topics == ["b"]

    def test_unknown_topic_uses_id(self):
        report = aggregate(_answers(("custom", False)), ["custom"])
        assert report.recommendations == ["Focus more on: custom"]

    def test_custom_topic_names(self):
        report = aggregate(_answers(("a", True)), ["a"], topic_names={"a": "Alpha"})
        assert report.recommendations == ["Great job with: Alpha"]

    def test_spanish(self):
        report = aggregate(_answers(("git", False)), ["git"], language="es")
        assert report.recommendations == ["Enfócate más en: Git"]
        assert report.score_message == "¡Sigue Practicando! 💪"


class TestScoreMessageAndTiming:
    def test_score_messages(self):
        assert aggregate(_answers(("a", True)), []).score_message.startswith("Excellent")
        assert aggregate(_answers(("a", True), ("a", True), ("a", False)), []).score_message.startswith("Good")
        assert aggregate(_answers(("a", False)), []).score_message.startswith("Keep")

    def test_timing(self):
        report = aggregate(_answers(("a", True), ("a", True)), ["a"], started_at=T0)
        assert report.total_seconds == 2
        assert report.avg_seconds_per_question == 1.0

    def test_timing_unknown(self):
        report = aggregate(_answers(("a", True)), ["a"])
        assert report.total_seconds == 0
        assert report.avg_seconds_per_question == 0.0

    def test_to_dict(self):
        data = aggregate(_answers(("a", True)), ["a"]).to_dict()
        assert data["per_topic"]["a"] == {"correct": 1, "total": 1, "pct": 100}
        assert data["overall_score_pct"] == 100
