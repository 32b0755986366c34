"""
LearnPath Assessment - Quiz scoring and attempt history.

This module provides:
- calculate_quiz_score: pure grading of an answer map
- AttemptStore: persisted attempt log and pass/fail queries
- QuizRun: timed attempt with exactly-once auto-submit
"""

from .scoring import (
    normalize_answer,
    answers_match,
    calculate_quiz_score,
)

from .attempts import (
    AttemptStore,
    DEFAULT_ATTEMPTS_KEY,
)

from .timer import QuizRun

__all__ = [
    # Scoring
    "normalize_answer",
    "answers_match",
    "calculate_quiz_score",
    # Attempts
    "AttemptStore",
    "DEFAULT_ATTEMPTS_KEY",
    # Timed runs
    "QuizRun",
]
