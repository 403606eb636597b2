from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from study_quiz.errors import DocumentLoadError
from study_quiz.providers.base import DocumentSource

log = logging.getLogger("study_quiz.source")


class FileSource(DocumentSource):
    def __init__(self, root: Path):
        self.root = Path(root)

    async def fetch(self, name: str) -> str:
        path = self.root / f"{name}.md"
        try:
            text = await asyncio.get_running_loop().run_in_executor(
                None, lambda: path.read_text(encoding="utf-8")
            )
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(name, str(e)) from e
        log.debug("Read %s (%d chars)", path, len(text))
        return text

    def name(self) -> str:
        return f"file:{self.root}"
