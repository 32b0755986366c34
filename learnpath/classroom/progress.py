"""
ProgressStore - Record and aggregate learning-item completion.

Owns the UserProgressStore aggregate:
- Item completion (idempotent) and "started" sub-state
- Video watch position with completion at the watch threshold
- Per-course completed items, counts, and percentage
- Last-viewed pointer used for resume

The whole aggregate is written back after every mutation.
"""

import logging
from typing import Optional

from learnpath.schemas import (
    CourseProgress,
    ItemProgress,
    LearningItem,
    UserProgressStore,
    VideoProgress,
)
from learnpath.utils import Clock, round_percent, utc_now

from .catalog import ContentCatalog, ItemCoordinate
from .storage import DocumentStore


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_KEY = "learnpath_progress"

# 90% watched = complete
VIDEO_COMPLETION_THRESHOLD = 0.9


class ProgressStore:
    """
    Track learner progress against a ContentCatalog.

    Course totals are always read from the catalog at write time, so the
    stored percentage reflects the catalog's present shape.
    """

    def __init__(
        self,
        documents: DocumentStore,
        catalog: ContentCatalog,
        key: str = DEFAULT_PROGRESS_KEY,
        clock: Clock = utc_now,
        video_completion_threshold: float = VIDEO_COMPLETION_THRESHOLD,
    ):
        """
        Initialize progress store and restore persisted progress.

        Args:
            documents: Document persistence over the key-value medium
            catalog: Loaded content catalog
            key: Storage key of the progress aggregate
            clock: Source of "now" for timestamps
            video_completion_threshold: Watched fraction that completes a video
        """
        self.documents = documents
        self.catalog = catalog
        self.key = key
        self.clock = clock
        self.video_completion_threshold = video_completion_threshold
        self.version = 0
        self._store = self._load()

    def _load(self) -> UserProgressStore:
        return self.documents.load(
            self.key,
            UserProgressStore,
            lambda: UserProgressStore(last_activity=self.clock()),
        )

    def _commit(self, store: UserProgressStore) -> None:
        """Swap in the new aggregate and persist it whole."""
        self._store = store
        self.version += 1
        self.documents.save(self.key, store)

    def _find_item(self, course_id: str, lesson_id: str, item_id: str) -> Optional[LearningItem]:
        item = self.catalog.get_learning_item_by_id(course_id, lesson_id, item_id)
        if not item:
            logger.warning(f"Unknown learning item {course_id}/{lesson_id}/{item_id}, ignoring")
        return item

    @property
    def snapshot(self) -> UserProgressStore:
        """Deep copy of the current aggregate."""
        return self._store.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Course progress helpers
    # -------------------------------------------------------------------------

    def _with_counts(self, progress: CourseProgress, completed_items: list[str]) -> CourseProgress:
        """
        Recompute the derived fields against the current catalog.

        Completed ids no longer in the course are dropped, so the count
        never exceeds the total.
        """
        item_ids = self.catalog.get_item_ids(progress.course_id)
        completed_items = [item_id for item_id in completed_items if item_id in item_ids]
        total = len(item_ids)
        return progress.model_copy(update={
            "completed_items": completed_items,
            "total_items": total,
            "completed_count": len(completed_items),
            "progress_percentage": round_percent(len(completed_items), total),
        })

    def _touch_course(
        self,
        course_id: str,
        lesson_id: str,
        item_id: str,
        completed_item: Optional[str] = None,
    ) -> CourseProgress:
        now = self.clock()
        existing = self._store.courses.get(course_id)
        if existing is None:
            existing = CourseProgress(
                course_id=course_id,
                enrolled_at=now,
                last_viewed_at=now,
            )

        completed_items = list(existing.completed_items)
        if completed_item and completed_item not in completed_items:
            completed_items.append(completed_item)

        progress = existing.model_copy(update={
            "last_viewed_at": now,
            "last_lesson_id": lesson_id,
            "last_item_id": item_id,
        })
        return self._with_counts(progress, completed_items)

    def _store_with(
        self, course: Optional[CourseProgress], item: Optional[ItemProgress]
    ) -> UserProgressStore:
        courses = self._store.courses
        if course is not None:
            courses = {**courses, course.course_id: course}
        items = self._store.items
        if item is not None:
            items = {**items, item.item_id: item}
        return UserProgressStore(courses=courses, items=items, last_activity=self.clock())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def mark_item_completed(
        self, course_id: str, lesson_id: str, item_id: str
    ) -> Optional[CourseProgress]:
        """
        Mark a learning item as completed.

        Idempotent: a completed item keeps its original completion time and
        is counted once. Returns the updated CourseProgress, or None if the
        item is not in the catalog.
        """
        item = self._find_item(course_id, lesson_id, item_id)
        if not item:
            return None
        return self._complete(item, course_id, lesson_id)

    def _complete(
        self,
        item: LearningItem,
        course_id: str,
        lesson_id: str,
        video: Optional[VideoProgress] = None,
    ) -> CourseProgress:
        existing = self._store.items.get(item.id)
        completed_at = existing.completed_at if existing and existing.completed_at else self.clock()

        item_progress = ItemProgress(
            item_id=item.id,
            lesson_id=lesson_id,
            course_id=course_id,
            completed_at=completed_at,
            video_progress=existing.video_progress if existing else None,
            pdf_opened=existing.pdf_opened if existing else None,
            url_visited=existing.url_visited if existing else None,
        )
        if item.type == "video":
            current = video or item_progress.video_progress or VideoProgress()
            item_progress.video_progress = current.model_copy(update={"completed": True})
        elif item.type == "pdf":
            item_progress.pdf_opened = True
        else:
            item_progress.url_visited = True

        course = self._touch_course(course_id, lesson_id, item.id, completed_item=item.id)
        self._commit(self._store_with(course, item_progress))
        logger.debug(f"Completed {item.id} in {course_id}: {course.progress_percentage}%")
        return course

    def mark_item_started(
        self, course_id: str, lesson_id: str, item_id: str
    ) -> Optional[CourseProgress]:
        """
        Record that a learner opened an item.

        Never downgrades a completed item. The course's last-viewed pointer
        moves either way.
        """
        item = self._find_item(course_id, lesson_id, item_id)
        if not item:
            return None

        existing = self._store.items.get(item_id)
        item_progress: Optional[ItemProgress] = None
        # A completed item keeps its entry as is; only the pointer moves
        if not (existing and existing.is_completed):
            item_progress = existing.model_copy() if existing else ItemProgress(
                item_id=item_id,
                lesson_id=lesson_id,
                course_id=course_id,
            )
            if item.type == "pdf":
                item_progress.pdf_opened = True
            elif item.type == "url":
                item_progress.url_visited = True
            elif item_progress.video_progress is None:
                item_progress.video_progress = VideoProgress()

        course = self._touch_course(course_id, lesson_id, item_id)
        self._commit(self._store_with(course, item_progress))
        logger.debug(f"Started {item_id} in {course_id}")
        return course

    def update_video_progress(
        self,
        course_id: str,
        lesson_id: str,
        item_id: str,
        current_time: float,
        duration: float,
    ) -> Optional[ItemProgress]:
        """
        Store the video watch position.

        Crossing the completion threshold on an incomplete item completes
        it exactly as mark_item_completed would. Returns the item's
        progress, or None if the item is not in the catalog.
        """
        item = self._find_item(course_id, lesson_id, item_id)
        if not item:
            return None

        existing = self._store.items.get(item_id)
        watched = duration > 0 and (current_time / duration) >= self.video_completion_threshold
        already_completed = bool(existing and existing.is_completed)

        video = VideoProgress(
            current_time=current_time,
            duration=duration,
            completed=watched or already_completed,
        )

        if watched and not already_completed:
            self._complete(item, course_id, lesson_id, video=video)
            return self._store.items[item_id]

        item_progress = existing.model_copy() if existing else ItemProgress(
            item_id=item_id,
            lesson_id=lesson_id,
            course_id=course_id,
        )
        item_progress.video_progress = video
        self._commit(self._store_with(None, item_progress))
        logger.debug(f"Video {item_id}: {current_time}/{duration}")
        return item_progress

    def reset_course_progress(self, course_id: str) -> None:
        """Remove the course's progress entry and the progress of its current items."""
        item_ids = self.catalog.get_item_ids(course_id)

        items = {
            item_id: progress
            for item_id, progress in self._store.items.items()
            if item_id not in item_ids
        }
        courses = {
            cid: progress
            for cid, progress in self._store.courses.items()
            if cid != course_id
        }

        self._commit(UserProgressStore(courses=courses, items=items, last_activity=self.clock()))
        logger.info(f"Reset progress for course {course_id}")

    def clear(self) -> None:
        """Drop all in-memory progress. The caller removes the persisted document."""
        self._store = UserProgressStore(last_activity=self.clock())
        self.version += 1

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_course_progress(self, course_id: str) -> Optional[CourseProgress]:
        """
        Progress for a course, or None if the learner never touched it.

        Derived fields are refreshed against the current catalog.
        """
        progress = self._store.courses.get(course_id)
        if progress is None:
            return None
        return self._with_counts(progress, progress.completed_items)

    def get_all_progress(self) -> dict[str, CourseProgress]:
        return {
            course_id: self._with_counts(progress, progress.completed_items)
            for course_id, progress in self._store.courses.items()
        }

    def is_item_completed(self, item_id: str) -> bool:
        item = self._store.items.get(item_id)
        return item is not None and item.is_completed

    def get_course_completion_percentage(self, course_id: str) -> int:
        """Completion percentage recomputed against the current catalog (0 if unknown)."""
        progress = self.get_course_progress(course_id)
        return progress.progress_percentage if progress else 0

    def get_lesson_completion_percentage(self, course_id: str, lesson_id: str) -> int:
        lesson = self.catalog.get_lesson_by_id(course_id, lesson_id)
        if not lesson:
            return 0
        completed = sum(1 for item in lesson.learning_items if self.is_item_completed(item.id))
        return round_percent(completed, len(lesson.learning_items))

    def get_completed_items_count(self, course_id: str) -> int:
        progress = self.get_course_progress(course_id)
        return progress.completed_count if progress else 0

    def get_last_viewed_item(self, course_id: str) -> Optional[ItemCoordinate]:
        progress = self.get_course_progress(course_id)
        if not progress or not progress.last_lesson_id or not progress.last_item_id:
            return None
        return ItemCoordinate(progress.last_lesson_id, progress.last_item_id)

    def get_video_progress(self, item_id: str) -> Optional[tuple[float, float]]:
        """(current_time, duration) for a video, or None if never played."""
        item = self._store.items.get(item_id)
        if not item or not item.video_progress:
            return None
        return (item.video_progress.current_time, item.video_progress.duration)

    def get_recently_viewed_courses(self, limit: int = 5) -> list[str]:
        """Course IDs ordered by most recent view."""
        courses = sorted(
            self._store.courses.values(),
            key=lambda p: p.last_viewed_at,
            reverse=True,
        )
        return [p.course_id for p in courses[:limit]]
