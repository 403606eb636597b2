"""Topics with a guide in each supported language."""
from __future__ import annotations

TOPICS = [
    {"id": "javascript", "name": "JavaScript"},
    {"id": "react", "name": "React"},
    {"id": "typescript", "name": "TypeScript"},
    {"id": "next", "name": "Next.js"},
    {"id": "nest", "name": "NestJS"},
    {"id": "node", "name": "Node.js"},
    {"id": "react-native", "name": "React Native"},
    {"id": "testing", "name": "Testing"},
    {"id": "architecture", "name": "Architecture"},
    {"id": "accessibility", "name": "Accessibility"},
    {"id": "git", "name": "Git"},
    {"id": "tooling", "name": "Tooling"},
    {"id": "devops", "name": "DevOps"},
]

TOPIC_NAMES = {t["id"]: t["name"] for t in TOPICS}


def topic_name(topic_id: str) -> str:
    return TOPIC_NAMES.get(topic_id, topic_id)


def guide_name(topic: str, language: str) -> str:
    return f"{topic}-{language}"
