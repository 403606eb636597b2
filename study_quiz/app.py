"""FastAPI application with all routes."""
from __future__ import annotations

import logging
import random

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from study_quiz.config import Settings, load_settings, save_settings
from study_quiz.errors import InvalidSessionError
from study_quiz.loader import GuideLoader
from study_quiz.models import GenerationConfig
from study_quiz.parsers.guide_parser import parse_content_index, parse_guide, search_sections
from study_quiz.question_generator import estimate_session, generate_session_questions
from study_quiz.session import QuizSession
from study_quiz.topics import TOPICS

app = FastAPI(title="Study Quiz")

# Global state (initialized in startup)
_settings: Settings | None = None
_active_sessions: dict[str, dict] = {}  # session_id -> {"session", "config"}
_loaders: dict[str, GuideLoader] = {}  # client_id -> loader

_log = logging.getLogger("study_quiz.api")


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def _get_source():
    s = get_settings()
    if s.guide_source == "file":
        from study_quiz.providers.source_file import FileSource
        return FileSource(s.guides_full_path)
    elif s.guide_source == "http":
        from study_quiz.providers.source_http import HttpSource
        return HttpSource(base_url=s.guides_url, timeout=s.http_timeout)
    raise ValueError(f"Unknown guide source: {s.guide_source}")


def _get_loader(client_id: str = "default") -> GuideLoader:
    # One loader per client, so a newer topic request from the same tab
    # supersedes its older one without touching other tabs.
    if client_id not in _loaders:
        _loaders[client_id] = GuideLoader(_get_source())
    return _loaders[client_id]


@app.on_event("startup")
async def startup():
    global _settings
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _log.info("Serving guides from %s", _get_source().name())


# ── API: Topics & guides ─────────────────────────────────────────────────

@app.get("/api/topics")
async def api_topics():
    return {"topics": TOPICS}


@app.get("/api/guides/{topic}")
async def api_guide(topic: str, language: str | None = None):
    language = language or get_settings().language
    text = await _get_loader().load_text(topic, language)
    return {
        "topic": topic,
        "language": language,
        "concepts": [
            {"name": c.name, "description": c.description, "comparison": c.comparison}
            for c in parse_guide(text)
        ],
        "index": [
            {"id": s.id, "title": s.title, "line": s.line}
            for s in parse_content_index(text, topic)
        ],
    }


@app.get("/api/guides/{topic}/search")
async def api_guide_search(topic: str, q: str = "", language: str | None = None):
    language = language or get_settings().language
    text = await _get_loader().load_text(topic, language)
    return {"results": search_sections(text, topic, q)}


# ── API: Session management ──────────────────────────────────────────────

def _config_from_body(body: dict) -> GenerationConfig:
    topics = body.get("topics") or body.get("topic") or []
    if isinstance(topics, str):
        topics = [topics]
    if not topics:
        raise HTTPException(400, "No topics selected")
    try:
        return get_settings().generation_config(
            topics,
            language=body.get("language"),
            questions_per_topic=body.get("questions_per_topic"),
            session_mode=body.get("session_mode"),
            question_types=body.get("question_types"),
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(400, str(e))


def _get_session(session_id: str) -> dict:
    if session_id not in _active_sessions:
        raise HTTPException(404, "Session not found")
    return _active_sessions[session_id]


def _session_view(session: QuizSession, config: GenerationConfig) -> dict:
    question = session.current_question()
    view = {
        "session_id": session.id,
        "question": question.to_dict() if question else None,
        "progress": session.progress(),
        "session_complete": session.is_complete,
        "reveal_delay_seconds": get_settings().reveal_delay_seconds,
    }
    if session.is_complete:
        view["report"] = session.report(config.report_topics, language=config.language).to_dict()
    return view


@app.post("/api/session/estimate")
async def api_session_estimate(request: Request):
    body = await request.json()
    config = _config_from_body(body)
    if config.questions_per_topic is None:
        raise HTTPException(400, "questions_per_topic is required for an estimate")
    total, minutes = estimate_session(
        len(config.topics), config.questions_per_topic, config.question_types,
    )
    return {"total_questions": total, "estimated_minutes": minutes}


@app.post("/api/session/start")
async def api_session_start(request: Request):
    body = await request.json()
    config = _config_from_body(body)

    concepts = await _get_loader(body.get("client_id", "default")).load_latest(
        config.topics, config.language,
    )
    if concepts is None:
        return {"superseded": True, "session_id": None}

    seed = body.get("seed")
    rng = random.Random(seed) if seed is not None else None
    questions = generate_session_questions(concepts, config, rng)
    if not questions:
        return {
            "error": "No questions available for the selected topics.",
            "session_id": None,
            "concept_counts": {t: len(c) for t, c in concepts.items()},
        }

    session = QuizSession(rng=rng)
    session.start(questions)
    _active_sessions[session.id] = {"session": session, "config": config}
    return _session_view(session, config)


@app.get("/api/session/{session_id}")
async def api_session_get(session_id: str):
    entry = _get_session(session_id)
    return _session_view(entry["session"], entry["config"])


@app.post("/api/session/{session_id}/reveal")
async def api_session_reveal(session_id: str):
    entry = _get_session(session_id)
    try:
        entry["session"].reveal_answer()
    except InvalidSessionError as e:
        raise HTTPException(409, str(e))
    return _session_view(entry["session"], entry["config"])


@app.post("/api/session/{session_id}/answer")
async def api_session_answer(session_id: str, request: Request):
    body = await request.json()
    entry = _get_session(session_id)
    session: QuizSession = entry["session"]

    question = session.current_question()
    try:
        if "option" in body:
            record = session.answer_choice(body["option"])
        elif "is_correct" in body:
            record = session.submit_answer(bool(body["is_correct"]))
        else:
            raise HTTPException(400, "Provide 'option' or 'is_correct'")
    except InvalidSessionError as e:
        raise HTTPException(409, str(e))

    result = _session_view(session, entry["config"])
    result["correct"] = record.is_correct
    if question is not None and hasattr(question, "correct_answer"):
        result["correct_answer"] = question.correct_answer
    return result


@app.post("/api/session/{session_id}/restart")
async def api_session_restart(session_id: str, request: Request):
    body = await request.json() if await request.body() else {}
    entry = _get_session(session_id)
    try:
        entry["session"].restart(with_reshuffle=bool(body.get("reshuffle", False)))
    except InvalidSessionError as e:
        raise HTTPException(409, str(e))
    return _session_view(entry["session"], entry["config"])


@app.get("/api/session/{session_id}/report")
async def api_session_report(session_id: str):
    entry = _get_session(session_id)
    config = entry["config"]
    return entry["session"].report(config.report_topics, language=config.language).to_dict()


@app.delete("/api/session/{session_id}")
async def api_session_delete(session_id: str):
    _get_session(session_id)
    del _active_sessions[session_id]
    return {"ok": True}


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    # Sources are built from settings, so existing loaders may be stale
    _loaders.clear()
    return s.to_dict()
