"""Fetch and parse guides for one or more topics.

Loading is the only asynchronous step.  ``load_latest`` is meant for
interactive callers that switch topics quickly: each call cancels the
previous in-flight load, and a load that was superseded returns None
instead of its (stale) result.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from study_quiz.errors import DocumentLoadError
from study_quiz.models import Concept
from study_quiz.parsers.guide_parser import parse_guide
from study_quiz.providers.base import DocumentSource
from study_quiz.topics import guide_name

_log = logging.getLogger("study_quiz.loader")


class GuideLoader:
    def __init__(self, source: DocumentSource):
        self.source = source
        self._generation = 0
        self._inflight: asyncio.Task | None = None

    async def load_text(self, topic: str, language: str) -> str:
        """Raw guide text; an unreadable guide reads as empty."""
        name = guide_name(topic, language)
        try:
            return await self.source.fetch(name)
        except DocumentLoadError as e:
            _log.warning("%s; treating '%s' as empty", e, topic)
            return ""

    async def load_topic(self, topic: str, language: str) -> list[Concept]:
        concepts = parse_guide(await self.load_text(topic, language))
        _log.info("Loaded %s-%s: %d concepts", topic, language, len(concepts))
        return concepts

    async def load_topics(self, topics: Sequence[str], language: str) -> dict[str, list[Concept]]:
        loaded: dict[str, list[Concept]] = {}
        for topic in topics:
            loaded[topic] = await self.load_topic(topic, language)
        return loaded

    async def load_latest(self, topics: Sequence[str], language: str) -> dict[str, list[Concept]] | None:
        """Load *topics*, superseding any load started earlier on this loader.

        Returns None if a newer request arrived before this one finished.
        """
        self._generation += 1
        generation = self._generation
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        task = asyncio.create_task(self.load_topics(list(topics), language))
        self._inflight = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                _log.info("Load of %s superseded", ", ".join(topics))
                return None
            raise
        if generation != self._generation:
            _log.info("Discarding stale load of %s", ", ".join(topics))
            return None
        return result
