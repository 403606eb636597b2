"""CLI entry point for study-quiz.

Usage:
  python -m study_quiz serve [--port PORT] [--host HOST]
  python -m study_quiz stop
  python -m study_quiz status
  python -m study_quiz topics
  python -m study_quiz parse FILE
  python -m study_quiz quiz TOPIC [TOPIC ...] [--language en|es] [--count N]
                            [--mode mixed|sequential] [--types flashcard|choice|both]
                            [--seed N]
"""
from __future__ import annotations

import asyncio
import os
import signal
import sys
from pathlib import Path

PID_FILE = Path(__file__).resolve().parent.parent / ".server.pid"

VALUE_FLAGS = ("--port", "--host", "--language", "--count", "--mode", "--types", "--seed")


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "status":
        _status()
    elif command == "topics":
        _topics()
    elif command == "parse":
        _parse(args[1:])
    elif command == "quiz":
        _quiz(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, status, topics, parse, quiz")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str | None) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _positional(args: list[str]) -> list[str]:
    out = []
    skip = False
    for a in args:
        if skip:
            skip = False
            continue
        if a in VALUE_FLAGS:
            skip = True
            continue
        out.append(a)
    return out


def _read_pid() -> int | None:
    """Read PID from file, return None if stale or missing."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None


def _stop() -> bool:
    """Stop a running server. Returns True if a server was stopped."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return False
    try:
        os.kill(pid, signal.SIGTERM)
        print(f"Stopped server (PID {pid}).")
        PID_FILE.unlink(missing_ok=True)
        return True
    except ProcessLookupError:
        print("Server was not running (stale PID file removed).")
        PID_FILE.unlink(missing_ok=True)
        return False


def _status():
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
    else:
        print(f"Server is running (PID {pid}).")


def _serve(args: list[str]):
    import uvicorn

    existing = _read_pid()
    if existing is not None:
        print(f"Server already running (PID {existing}). Use 'stop' first.")
        sys.exit(1)

    port = int(_parse_flag(args, "--port", "8765"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    PID_FILE.write_text(str(os.getpid()))

    print(f"Starting Study Quiz on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(
            "study_quiz.app:app",
            host=host,
            port=port,
            reload=False,
            timeout_graceful_shutdown=5,
        )
    finally:
        PID_FILE.unlink(missing_ok=True)


def _topics():
    from study_quiz.config import load_settings
    from study_quiz.topics import TOPICS, guide_name

    settings = load_settings()
    root = settings.guides_full_path
    for t in TOPICS:
        have = [
            lang for lang in ("en", "es")
            if (root / f"{guide_name(t['id'], lang)}.md").exists()
        ]
        print(f"  {t['id']:15s} {t['name']:15s} {', '.join(have) or '-'}")


def _parse(args: list[str]):
    from study_quiz.parsers.guide_parser import parse_guide_file

    if not args:
        print("Usage: parse FILE")
        sys.exit(1)
    path = Path(args[0])
    if not path.exists():
        print(f"Not found: {path}")
        sys.exit(1)

    concepts = parse_guide_file(path)
    for c in concepts:
        marker = " (+comparison)" if c.comparison else ""
        print(f"  {c.name}{marker}")
    print(f"\n{len(concepts)} concepts")


def _ask(prompt: str) -> str:
    try:
        return input(prompt).strip()
    except EOFError:
        return ""


def _run_quiz(session, config) -> None:
    from study_quiz.models import ChoiceQuestion

    while not session.is_complete:
        q = session.current_question()
        p = session.progress()
        where = f" [{q.topic}]" if q.topic else ""
        print(f"\n── {p['current']}/{p['total']}{where} ── score {p['correct']}/{p['answered']}")

        if isinstance(q, ChoiceQuestion):
            print(q.prompt)
            for i, opt in enumerate(q.options, 1):
                print(f"  {i}) {opt}")
            choice = _ask("Your answer: ")
            idx = int(choice) - 1 if choice.isdigit() else -1
            selected = q.options[idx] if 0 <= idx < len(q.options) else ""
            record = session.answer_choice(selected)
            print("Correct!" if record.is_correct else f"Wrong: {q.correct_answer}")
        else:
            label = "Comparison" if q.card_type == "comparison" else "Description"
            print(f"{q.concept} ({label})")
            _ask("Press Enter to reveal...")
            session.reveal_answer()
            print(q.comparison if q.card_type == "comparison" else q.description)
            knew = _ask("Did you know it? [y/N] ").lower().startswith(("y", "s"))
            session.submit_answer(knew)

    report = session.report(config.report_topics, language=config.language)
    print("\n" + "=" * 40)
    print(f"{report.score_message}  {report.overall_score_pct}% "
          f"({report.total_correct}/{report.total_questions})")
    for topic, stats in report.per_topic.items():
        print(f"  {topic:15s} {stats.correct}/{stats.total}  {stats.pct}%")
    for rec in report.recommendations:
        print(f"  * {rec}")


def _quiz(args: list[str]):
    import random

    from study_quiz.config import load_settings
    from study_quiz.loader import GuideLoader
    from study_quiz.providers.source_file import FileSource
    from study_quiz.question_generator import generate_session_questions
    from study_quiz.session import QuizSession

    topics = _positional(args)
    if not topics:
        print("Usage: quiz TOPIC [TOPIC ...]")
        sys.exit(1)

    settings = load_settings()
    count = _parse_flag(args, "--count", None)
    seed = _parse_flag(args, "--seed", None)
    try:
        config = settings.generation_config(
            topics,
            language=_parse_flag(args, "--language", None),
            questions_per_topic=int(count) if count else None,
            session_mode=_parse_flag(args, "--mode", None),
            question_types=_parse_flag(args, "--types", None),
        )
        rng = random.Random(int(seed)) if seed else None
    except ValueError as e:
        print(f"Invalid options: {e}")
        sys.exit(1)

    if settings.guide_source == "http":
        from study_quiz.providers.source_http import HttpSource
        source = HttpSource(base_url=settings.guides_url, timeout=settings.http_timeout)
    else:
        source = FileSource(settings.guides_full_path)

    concepts = asyncio.run(GuideLoader(source).load_topics(config.topics, config.language))
    questions = generate_session_questions(concepts, config, rng)
    if not questions:
        print("No questions available for the selected topics.")
        sys.exit(1)

    session = QuizSession(rng=rng)
    session.start(questions)
    try:
        _run_quiz(session, config)
    except KeyboardInterrupt:
        print("\n\nStopped early.")
        report = session.report(config.report_topics, language=config.language)
        print(f"Score so far: {report.overall_score_pct}% "
              f"({report.total_correct}/{report.total_questions})")


if __name__ == "__main__":
    main()
