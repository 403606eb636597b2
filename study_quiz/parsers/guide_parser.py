"""Parse study guides (``{topic}-{language}.md``) into Concept objects.

Guides are markdown with one concept per ``## `` section and bold field
labels in either English or Spanish:

  ## Server Components
  **Description:** Components rendered on the server ...
  continuation lines are joined with spaces
  **Comparison:** Unlike client components ...
  **Example:**
  ```tsx
  ...
  ```

Labels are matched per line, so a file may mix both languages.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from study_quiz.models import Concept, GuideSection

_log = logging.getLogger("study_quiz.parser")

SECTION_PREFIX = "## "
FENCE = "```"

DESCRIPTION_LABEL = re.compile(r"\*\*(?:description|descripción):\*\*", re.IGNORECASE)
COMPARISON_LABEL = re.compile(r"\*\*(?:comparison|comparación):\*\*", re.IGNORECASE)
EXAMPLE_LABEL = re.compile(r"\*\*(?:example|ejemplo):\*\*", re.IGNORECASE)


def parse_guide(text: str) -> list[Concept]:
    concepts: list[Concept] = []
    name: str | None = None
    description: list[str] = []
    comparison: list[str] = []
    active: list[str] | None = None

    def flush():
        desc = " ".join(description).strip()
        if name and desc:
            concepts.append(Concept(
                name=name,
                description=desc,
                comparison=" ".join(comparison).strip(),
            ))
        elif name:
            _log.debug("Dropping section without description: %s", name)

    for line in text.splitlines():
        if line.startswith(SECTION_PREFIX):
            flush()
            name = line[len(SECTION_PREFIX):].strip()
            description, comparison = [], []
            active = None
            continue

        if DESCRIPTION_LABEL.search(line):
            description = [DESCRIPTION_LABEL.sub("", line, count=1).strip()]
            active = description
            continue

        if COMPARISON_LABEL.search(line):
            comparison = [COMPARISON_LABEL.sub("", line, count=1).strip()]
            active = comparison
            continue

        if EXAMPLE_LABEL.search(line):
            active = None
            continue

        stripped = line.strip()
        if active is None or not stripped:
            continue
        # Fences and other bold-label lines are markup, not prose
        if stripped.startswith(FENCE) or stripped.startswith("**"):
            continue
        active.append(stripped)

    flush()
    return concepts


def parse_guide_file(path: Path) -> list[Concept]:
    return parse_guide(path.read_text(encoding="utf-8"))


def _slugify(title: str) -> str:
    return re.sub(r"\s+", "-", title.strip().lower())


def parse_content_index(text: str, topic: str) -> list[GuideSection]:
    """List the ``## `` headings of a guide with their line numbers."""
    index: list[GuideSection] = []
    for i, line in enumerate(text.splitlines()):
        if line.startswith(SECTION_PREFIX):
            title = line[len(SECTION_PREFIX):].strip()
            index.append(GuideSection(
                title=title,
                line=i,
                id=f"{topic}-{_slugify(title)}",
                topic=topic,
            ))
    return index


def section_content(text: str, section: GuideSection) -> str:
    """Raw markdown of *section*, from its heading up to the next one."""
    lines = text.splitlines()
    end = len(lines)
    for i in range(section.line + 1, len(lines)):
        if lines[i].startswith(SECTION_PREFIX):
            end = i
            break
    return "\n".join(lines[section.line:end])


def strip_examples(content: str) -> str:
    """Drop Example blocks; a Comparison label ends the block."""
    kept: list[str] = []
    skipping = False
    for line in content.splitlines():
        if EXAMPLE_LABEL.search(line):
            skipping = True
            continue
        if COMPARISON_LABEL.search(line):
            skipping = False
        if not skipping:
            kept.append(line)
    return "\n".join(kept)


def search_sections(text: str, topic: str, query: str) -> list[dict]:
    """Sections whose title contains *query* (case-insensitive)."""
    query = query.strip().lower()
    if not query:
        return []

    results = []
    for section in parse_content_index(text, topic):
        if query in section.title.lower():
            results.append({
                "id": section.id,
                "title": section.title,
                "topic": topic,
                "line": section.line,
                "content": section_content(text, section),
            })
    return results
