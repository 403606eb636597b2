from __future__ import annotations


class StudyQuizError(Exception):
    pass


class DocumentLoadError(StudyQuizError):
    """A guide could not be fetched or read."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Could not load guide '{name}': {reason}")
        self.name = name
        self.reason = reason


class InvalidSessionError(StudyQuizError):
    """A session operation was called in a phase that does not allow it."""
