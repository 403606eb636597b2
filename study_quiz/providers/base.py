from __future__ import annotations

from abc import ABC, abstractmethod


class DocumentSource(ABC):
    @abstractmethod
    async def fetch(self, name: str) -> str:
        """Return the text of guide *name* (``{topic}-{language}``).

        Raises DocumentLoadError when it cannot be read.
        """
        ...

    @abstractmethod
    def name(self) -> str:
        ...
