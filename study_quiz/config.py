from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from study_quiz.models import GenerationConfig

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "guide_source": "file",
    "guides_dir": "guides",
    "guides_url": "http://localhost:5173/learning/guides",
    "http_timeout": 10.0,
    "language": "en",
    "questions_per_topic": 5,
    "session_mode": "mixed",
    "question_types": "both",
    "reveal_delay_seconds": 1.5,
}


@dataclass
class Settings:
    guide_source: str = DEFAULTS["guide_source"]
    guides_dir: str = DEFAULTS["guides_dir"]
    guides_url: str = DEFAULTS["guides_url"]
    http_timeout: float = DEFAULTS["http_timeout"]
    language: str = DEFAULTS["language"]
    questions_per_topic: int = DEFAULTS["questions_per_topic"]
    session_mode: str = DEFAULTS["session_mode"]
    question_types: str = DEFAULTS["question_types"]
    # Pause presentation layers may show after an answer; the core never waits
    reveal_delay_seconds: float = DEFAULTS["reveal_delay_seconds"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def guides_full_path(self) -> Path:
        return self.project_root / self.guides_dir

    def generation_config(self, topics: list[str], **overrides) -> GenerationConfig:
        """Session config from these defaults, with non-None *overrides* applied."""
        values = {
            "topics": list(topics),
            "language": self.language,
            "questions_per_topic": self.questions_per_topic,
            "session_mode": self.session_mode,
            "question_types": self.question_types,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationConfig(**values)

    def to_dict(self) -> dict:
        return {
            "guide_source": self.guide_source,
            "guides_dir": self.guides_dir,
            "guides_url": self.guides_url,
            "http_timeout": self.http_timeout,
            "language": self.language,
            "questions_per_topic": self.questions_per_topic,
            "session_mode": self.session_mode,
            "question_types": self.question_types,
            "reveal_delay_seconds": self.reveal_delay_seconds,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
