"""
QuizRun - One timed quiz attempt from start to submission.

Submission is the commit point: abandoning a run persists nothing. When
the quiz has a time limit, expiry forces one submission with whatever
answers are recorded; the submit guard makes that exactly-once even if
the timer fires again or the learner submits at the same moment.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from learnpath.schemas import AnswerValue, Quiz, QuizAttempt, QuizResult
from learnpath.utils import Clock, utc_now

from .attempts import AttemptStore


logger = logging.getLogger(__name__)


class QuizRun:
    """Collect answers for one attempt and submit it at most once."""

    def __init__(self, quiz: Quiz, attempts: AttemptStore, clock: Clock = utc_now):
        self.quiz = quiz
        self.attempts = attempts
        self.clock = clock
        self.attempt: QuizAttempt = attempts.start_attempt(quiz.id, quiz.course_id)
        self.answers: dict[str, AnswerValue] = {}
        self.result: Optional[QuizResult] = None
        self.auto_submitted = False
        self._submitting = False

    @property
    def is_submitted(self) -> bool:
        return self.result is not None

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def select_answer(self, question_id: str, answer: AnswerValue) -> None:
        """Record an answer. Ignored once the run is submitted."""
        if self._submitting or self.is_submitted:
            return
        self.answers[question_id] = answer

    def answered_count(self) -> int:
        question_ids = {q.id for q in self.quiz.questions}
        return sum(1 for qid in self.answers if qid in question_ids)

    # -------------------------------------------------------------------------
    # Time
    # -------------------------------------------------------------------------

    @property
    def time_limit_seconds(self) -> Optional[int]:
        return self.quiz.time_limit * 60 if self.quiz.time_limit else None

    def elapsed_seconds(self, now: Optional[datetime] = None) -> int:
        now = now or self.clock()
        return max(0, int((now - self.attempt.started_at).total_seconds()))

    def time_remaining(self, now: Optional[datetime] = None) -> Optional[int]:
        """Seconds left, or None for an untimed quiz."""
        limit = self.time_limit_seconds
        if limit is None:
            return None
        return max(0, limit - self.elapsed_seconds(now))

    def is_time_up(self, now: Optional[datetime] = None) -> bool:
        remaining = self.time_remaining(now)
        return remaining is not None and remaining <= 0

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit(self) -> QuizResult:
        """
        Submit the recorded answers.

        Returns the same result on every call after the first. If the write
        fails the run stays open so the learner can submit again.
        """
        if self.result is not None:
            return self.result
        if self._submitting:
            raise RuntimeError("Submission already in progress")

        self._submitting = True
        try:
            self.result = self.attempts.submit_attempt(self.attempt, dict(self.answers))
        finally:
            self._submitting = False
        return self.result

    def tick(self, now: Optional[datetime] = None) -> Optional[QuizResult]:
        """
        Timer callback: auto-submit once when the time limit is reached.

        Returns the result only on the tick that submitted.
        """
        if self.is_submitted or self._submitting or not self.is_time_up(now):
            return None
        logger.info(f"Time limit reached for quiz {self.quiz.id}, auto-submitting")
        self.auto_submitted = True
        return self.submit()

    async def run_timer(self) -> Optional[QuizResult]:
        """
        Sleep until the time limit, then auto-submit.

        Returns immediately for untimed quizzes. Cancel the task when the
        learner submits or leaves.
        """
        remaining = self.time_remaining()
        if remaining is None:
            return None
        await asyncio.sleep(remaining)
        deadline = self.attempt.started_at + timedelta(seconds=self.time_limit_seconds)
        return self.tick(max(self.clock(), deadline))
