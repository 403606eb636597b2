"""User-facing text produced by the core, in English and Spanish."""
from __future__ import annotations

CHOICE_PROMPTS = {
    "en": {
        "description": "What is {concept}?",
        "comparison": "How does {concept} compare to other concepts?",
    },
    "es": {
        "description": "¿Qué es {concept}?",
        "comparison": "¿Cómo se compara {concept} con otros conceptos?",
    },
}

RECOMMENDATIONS = {
    "en": {
        "improve": "Focus more on: {topics}",
        "strength": "Great job with: {topics}",
    },
    "es": {
        "improve": "Enfócate más en: {topics}",
        "strength": "¡Buen trabajo con: {topics}!",
    },
}

SCORE_MESSAGES = {
    "en": {
        "excellent": "Excellent Performance! 🌟",
        "good": "Good Performance! 👏",
        "needs_work": "Keep Practicing! 💪",
    },
    "es": {
        "excellent": "¡Excelente Desempeño! 🌟",
        "good": "¡Buen Desempeño! 👏",
        "needs_work": "¡Sigue Practicando! 💪",
    },
}


def _texts(table: dict, language: str) -> dict:
    return table.get(language) or table["en"]


def choice_prompt(concept: str, choice_type: str, language: str = "en") -> str:
    template = _texts(CHOICE_PROMPTS, language).get(choice_type) or CHOICE_PROMPTS["en"][choice_type]
    return template.format(concept=concept)


def format_recommendation(kind: str, topic_names: list[str], language: str = "en") -> str:
    return _texts(RECOMMENDATIONS, language)[kind].format(topics=", ".join(topic_names))


def score_message(pct: int, language: str = "en") -> str:
    texts = _texts(SCORE_MESSAGES, language)
    if pct >= 80:
        return texts["excellent"]
    if pct >= 60:
        return texts["good"]
    return texts["needs_work"]
