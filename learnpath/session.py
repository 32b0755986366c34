"""
LearnerSession - The single owned state object for one learner.

Initialized once from persisted storage after the catalog and quiz bank
are ready, mutated only through its stores, and torn down by reset().
"""

import asyncio
import logging
from typing import Optional

from learnpath.assessment import AttemptStore, QuizRun
from learnpath.classroom import (
    CatalogLoader,
    ContentCatalog,
    DashboardSummary,
    DocumentStore,
    EnrollmentStore,
    ItemCoordinate,
    KeyValueStorage,
    MemoryStorage,
    NavigationResolver,
    ProgressStore,
    QuizBank,
    QuizBankLoader,
    ResumePointResolver,
    SQLiteStorage,
    build_dashboard,
)
from learnpath.config import Settings
from learnpath.errors import QuizNotFoundError, StorageWriteError
from learnpath.utils import Clock, utc_now


logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the key-value medium selected by settings."""
    if settings.storage_backend == "memory":
        return MemoryStorage()
    return SQLiteStorage(settings.storage_path)


class LearnerSession:
    """Owns the catalog, quiz bank, and the enrollment/progress/attempt stores."""

    def __init__(
        self,
        storage: KeyValueStorage,
        catalog: ContentCatalog,
        quiz_bank: QuizBank,
        settings: Optional[Settings] = None,
        clock: Clock = utc_now,
    ):
        self.settings = settings or Settings()
        self.storage = storage
        self.catalog = catalog
        self.quiz_bank = quiz_bank
        self.clock = clock

        self.documents = DocumentStore(storage)
        self.enrollment = EnrollmentStore(
            self.documents, catalog, key=self.settings.enrollment_key, clock=clock,
        )
        self.progress = ProgressStore(
            self.documents,
            catalog,
            key=self.settings.progress_key,
            clock=clock,
            video_completion_threshold=self.settings.video_completion_threshold,
        )
        self.attempts = AttemptStore(
            self.documents, quiz_bank, key=self.settings.attempts_key, clock=clock,
        )
        self.navigator = NavigationResolver(catalog)
        self.resume = ResumePointResolver(self.progress, self.navigator)

    @classmethod
    async def open(
        cls,
        settings: Optional[Settings] = None,
        storage: Optional[KeyValueStorage] = None,
        clock: Clock = utc_now,
    ) -> "LearnerSession":
        """
        Load catalog and quiz bank, then restore persisted state.

        Raises:
            CatalogUnavailableError: If either content document fails to load
        """
        settings = settings or Settings()
        catalog_loader = CatalogLoader(settings.catalog_path)
        quiz_loader = QuizBankLoader(settings.quizzes_path)
        catalog, quiz_bank = await asyncio.gather(
            catalog_loader.ready(),
            quiz_loader.ready(),
        )
        return cls(
            storage if storage is not None else build_storage(settings),
            catalog,
            quiz_bank,
            settings=settings,
            clock=clock,
        )

    # -------------------------------------------------------------------------
    # Conveniences over the stores
    # -------------------------------------------------------------------------

    def get_resume_point(self, course_id: str) -> Optional[ItemCoordinate]:
        return self.resume.get_resume_point(course_id)

    def get_recently_viewed_courses(self) -> list[str]:
        return self.progress.get_recently_viewed_courses(limit=self.settings.recent_courses_limit)

    def start_quiz(self, quiz_id: str) -> QuizRun:
        """
        Begin a timed run of a quiz. Nothing is persisted until it is submitted.

        Raises:
            QuizNotFoundError: If no quiz has this id
        """
        quiz = self.quiz_bank.get_quiz_by_id(quiz_id)
        if not quiz:
            raise QuizNotFoundError(quiz_id)
        return QuizRun(quiz, self.attempts, clock=self.clock)

    def dashboard(self) -> DashboardSummary:
        """Summary for the learner's role, or every course before enrollment."""
        data = self.enrollment.get_enrollment_data()
        role = data.role.value if data else None
        return build_dashboard(self.catalog, self.progress, self.attempts, self.quiz_bank, role=role)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """
        Return the learner to the pre-enrollment state.

        Removes the enrollment, progress, and attempt documents. Every
        removal is attempted and every in-memory aggregate is cleared even
        if one removal fails; the first failure is then raised.

        Raises:
            StorageWriteError: If any document could not be removed
        """
        first_error: Optional[StorageWriteError] = None
        for key in (
            self.settings.enrollment_key,
            self.settings.progress_key,
            self.settings.attempts_key,
        ):
            try:
                self.documents.remove(key)
            except StorageWriteError as e:
                first_error = first_error or e

        self.enrollment.clear()
        self.progress.clear()
        self.attempts.clear()

        if first_error:
            raise first_error
        logger.info("Learner session reset")
