"""
learnpath - Command-line access to a learner's progress.

Usage:
  python -m learnpath progress COURSE_ID
  python -m learnpath resume COURSE_ID
  python -m learnpath complete COURSE_ID LESSON_ID ITEM_ID
  python -m learnpath submit QUIZ_ID --answer q1=0 --answer q2=true
  python -m learnpath reset --yes

Settings come from learnpath.yaml / LEARNPATH_* variables (see config.py).
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from learnpath.config import load_settings
from learnpath.errors import LearnPathError
from learnpath.schemas import AnswerValue
from learnpath.session import LearnerSession
from learnpath.utils import setup_logging


logger = logging.getLogger(__name__)


def parse_answer(raw: str) -> tuple[str, AnswerValue]:
    """Parse QUESTION_ID=VALUE; integer-looking values become option indexes."""
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"Expected QUESTION_ID=VALUE, got '{raw}'")
    question_id, value = raw.split("=", 1)
    if value.lstrip("-").isdigit():
        return question_id, int(value)
    return question_id, value


def _print(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def cmd_progress(session: LearnerSession, args) -> int:
    progress = session.progress.get_course_progress(args.course_id)
    _print({
        "course_id": args.course_id,
        "percentage": session.progress.get_course_completion_percentage(args.course_id),
        "progress": progress.model_dump(mode="json", by_alias=True) if progress else None,
    })
    return 0


def cmd_resume(session: LearnerSession, args) -> int:
    point = session.get_resume_point(args.course_id)
    if point is None:
        _print({"course_id": args.course_id, "resume": None})
        return 1
    _print({"course_id": args.course_id, "lesson_id": point.lesson_id, "item_id": point.item_id})
    return 0


def cmd_complete(session: LearnerSession, args) -> int:
    progress = session.progress.mark_item_completed(args.course_id, args.lesson_id, args.item_id)
    if progress is None:
        logger.error(f"Unknown item: {args.course_id}/{args.lesson_id}/{args.item_id}")
        return 1
    _print(progress.model_dump(mode="json", by_alias=True))
    return 0


def cmd_submit(session: LearnerSession, args) -> int:
    run = session.start_quiz(args.quiz_id)
    for question_id, value in args.answer or []:
        run.select_answer(question_id, value)
    result = run.submit()
    _print(result.model_dump(mode="json", by_alias=True))
    return 0 if result.passed else 2


def cmd_reset(session: LearnerSession, args) -> int:
    if not args.yes:
        logger.error("Refusing to reset without --yes")
        return 1
    session.reset()
    _print({"reset": True})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="learnpath", description="Learning progress engine")
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--log-level", help="Override log level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("progress", help="Show course progress")
    p.add_argument("course_id")
    p.set_defaults(func=cmd_progress)

    p = sub.add_parser("resume", help="Show where to resume a course")
    p.add_argument("course_id")
    p.set_defaults(func=cmd_resume)

    p = sub.add_parser("complete", help="Mark a learning item completed")
    p.add_argument("course_id")
    p.add_argument("lesson_id")
    p.add_argument("item_id")
    p.set_defaults(func=cmd_complete)

    p = sub.add_parser("submit", help="Submit answers for a quiz")
    p.add_argument("quiz_id")
    p.add_argument("--answer", action="append", type=parse_answer, metavar="QID=VALUE")
    p.set_defaults(func=cmd_submit)

    p = sub.add_parser("reset", help="Clear enrollment, progress, and quiz attempts")
    p.add_argument("--yes", action="store_true", help="Confirm the reset")
    p.set_defaults(func=cmd_reset)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        # ValidationError is a ValueError
        setup_logging(args.log_level or "INFO")
        logger.error(f"Invalid configuration: {e}")
        return 1
    setup_logging(args.log_level or settings.log_level)

    try:
        session = asyncio.run(LearnerSession.open(settings))
        return args.func(session, args)
    except LearnPathError as e:
        logger.error(e.message)
        return 1


if __name__ == "__main__":
    sys.exit(main())
