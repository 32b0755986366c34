"""
AttemptStore - Quiz attempt log and pass/fail history.

Attempts are created in memory at quiz start and become durable only on
submission, when they are appended to the persisted log. They are never
edited afterwards; the only removal is a full reset of one quiz's history.
"""

import logging
from typing import Optional

from learnpath.classroom.catalog import QuizBank
from learnpath.classroom.storage import DocumentStore
from learnpath.errors import AttemptAlreadySubmittedError, QuizNotFoundError
from learnpath.schemas import AnswerValue, Quiz, QuizAttempt, QuizResult
from learnpath.utils import Clock, round_half_up, utc_now

from .scoring import calculate_quiz_score


logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS_KEY = "learnpath_quiz_attempts"


class AttemptStore:
    """Record quiz attempts; the persisted document is a flat list of attempts."""

    def __init__(
        self,
        documents: DocumentStore,
        quiz_bank: QuizBank,
        key: str = DEFAULT_ATTEMPTS_KEY,
        clock: Clock = utc_now,
    ):
        self.documents = documents
        self.quiz_bank = quiz_bank
        self.key = key
        self.clock = clock
        self._attempts: list[QuizAttempt] = documents.load(key, list[QuizAttempt], list)

    def _save(self, attempts: list[QuizAttempt]) -> None:
        """Persist first; the in-memory log changes only after a durable write."""
        self.documents.save(self.key, attempts, list[QuizAttempt])
        self._attempts = attempts

    def _require_quiz(self, quiz_id: str) -> Quiz:
        quiz = self.quiz_bank.get_quiz_by_id(quiz_id)
        if not quiz:
            raise QuizNotFoundError(quiz_id)
        return quiz

    # -------------------------------------------------------------------------
    # Attempt lifecycle
    # -------------------------------------------------------------------------

    def start_attempt(self, quiz_id: str, course_id: str) -> QuizAttempt:
        """Create an unsaved attempt stamped with the start time."""
        return QuizAttempt(
            quiz_id=quiz_id,
            course_id=course_id,
            started_at=self.clock(),
        )

    def submit_attempt(self, attempt: QuizAttempt, answers: dict[str, AnswerValue]) -> QuizResult:
        """
        Grade an attempt, stamp it, and append it to the log.

        Returns:
            QuizResult including time taken in whole seconds

        Raises:
            QuizNotFoundError: If the attempt's quiz has no definition
            AttemptAlreadySubmittedError: If the attempt was already submitted
            StorageWriteError: If the log could not be written
        """
        if attempt.completed_at is not None:
            raise AttemptAlreadySubmittedError(attempt.quiz_id)

        quiz = self._require_quiz(attempt.quiz_id)
        result = calculate_quiz_score(quiz, answers)

        completed_at = self.clock()
        time_taken = max(0, round_half_up((completed_at - attempt.started_at).total_seconds()))
        result.time_taken = time_taken

        submitted = attempt.model_copy(update={
            "completed_at": completed_at,
            "answers": dict(answers),
            "score": result.score,
            "passed": result.passed,
            "time_taken": time_taken,
        })
        self._save([*self._attempts, submitted])

        # Only a durable submission marks the caller's attempt as completed
        for field in ("completed_at", "answers", "score", "passed", "time_taken"):
            setattr(attempt, field, getattr(submitted, field))

        logger.info(f"Quiz {quiz.id} submitted: score={result.score}, passed={result.passed}")
        return result

    def score_attempt(self, attempt: QuizAttempt) -> QuizResult:
        """Recompute the result of a stored attempt from its answers."""
        quiz = self._require_quiz(attempt.quiz_id)
        result = calculate_quiz_score(quiz, attempt.answers)
        result.time_taken = attempt.time_taken
        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def all_attempts(self, quiz_id: str) -> list[QuizAttempt]:
        """Attempts for a quiz, newest first."""
        return sorted(
            (a for a in self._attempts if a.quiz_id == quiz_id),
            key=lambda a: a.started_at,
            reverse=True,
        )

    def latest_attempt(self, quiz_id: str) -> Optional[QuizAttempt]:
        attempts = self.all_attempts(quiz_id)
        return attempts[0] if attempts else None

    def has_attempted(self, quiz_id: str) -> bool:
        return any(a.quiz_id == quiz_id for a in self._attempts)

    def has_passed(self, quiz_id: str) -> bool:
        """True if any attempt ever passed; a later failed retake doesn't revoke it."""
        return any(a.quiz_id == quiz_id and a.passed for a in self._attempts)

    def get_passed_quiz_ids(self) -> list[str]:
        passed = []
        for attempt in self._attempts:
            if attempt.passed and attempt.completed_at and attempt.quiz_id not in passed:
                passed.append(attempt.quiz_id)
        return passed

    def best_score(self, quiz_id: str) -> Optional[int]:
        scores = [a.score for a in self._attempts if a.quiz_id == quiz_id]
        return max(scores) if scores else None

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset_attempts(self, quiz_id: str) -> None:
        """Remove every attempt for one quiz; other quizzes are untouched."""
        self._save([a for a in self._attempts if a.quiz_id != quiz_id])
        logger.info(f"Reset attempts for quiz {quiz_id}")

    def clear(self) -> None:
        """Drop all in-memory attempts. The caller removes the persisted document."""
        self._attempts = []

    @property
    def attempts(self) -> list[QuizAttempt]:
        return list(self._attempts)
