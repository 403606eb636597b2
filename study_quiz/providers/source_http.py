from __future__ import annotations

import logging
import time

import httpx

from study_quiz.errors import DocumentLoadError
from study_quiz.providers.base import DocumentSource

log = logging.getLogger("study_quiz.source")


class HttpSource(DocumentSource):
    def __init__(
        self,
        base_url: str = "http://localhost:5173/learning/guides",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, name: str) -> str:
        url = f"{self.base_url}/{name}.md"
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(url)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise DocumentLoadError(name, str(e)) from e
        log.info("GET %s (%.2fs, %d bytes)", url, time.monotonic() - t0, len(resp.content))
        return resp.text

    def name(self) -> str:
        return f"http:{self.base_url}"
