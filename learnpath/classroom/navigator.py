"""
Navigator - Ordered traversal over a course and resume-point resolution.

Provides:
- Next/previous/first learning item across lesson boundaries
- Item position within a course
- Resume point for a learner re-entering a course

Traversal follows the array order of lessons and items exactly as the
catalog stores them. The numeric `order` fields are never used to sort.
"""

from dataclasses import dataclass
from typing import Optional

from learnpath.schemas import Lesson, LearningItem

from .catalog import ContentCatalog, ItemCoordinate
from .progress import ProgressStore


@dataclass(frozen=True)
class NavigationTarget:
    """Lesson and item a navigation step lands on."""
    lesson: Lesson
    item: LearningItem

    @property
    def coordinate(self) -> ItemCoordinate:
        return ItemCoordinate(self.lesson.id, self.item.id)


# -----------------------------------------------------------------------------
# Pure traversal over a lesson list
# -----------------------------------------------------------------------------

def _locate(lessons: list[Lesson], lesson_id: str, item_id: str) -> Optional[tuple[int, int]]:
    for lesson_idx, lesson in enumerate(lessons):
        if lesson.id != lesson_id:
            continue
        for item_idx, item in enumerate(lesson.learning_items):
            if item.id == item_id:
                return lesson_idx, item_idx
        return None
    return None


def first_item(lessons: list[Lesson]) -> Optional[NavigationTarget]:
    """First item of the first lesson that has any items."""
    for lesson in lessons:
        if lesson.learning_items:
            return NavigationTarget(lesson, lesson.learning_items[0])
    return None


def next_item(lessons: list[Lesson], lesson_id: str, item_id: str) -> Optional[NavigationTarget]:
    """
    Item after (lesson_id, item_id), skipping empty lessons.

    Returns None at the end of the course or for an unknown coordinate.
    """
    position = _locate(lessons, lesson_id, item_id)
    if position is None:
        return None
    lesson_idx, item_idx = position

    current = lessons[lesson_idx]
    if item_idx + 1 < len(current.learning_items):
        return NavigationTarget(current, current.learning_items[item_idx + 1])

    for lesson in lessons[lesson_idx + 1:]:
        if lesson.learning_items:
            return NavigationTarget(lesson, lesson.learning_items[0])
    return None


def previous_item(lessons: list[Lesson], lesson_id: str, item_id: str) -> Optional[NavigationTarget]:
    """
    Item before (lesson_id, item_id), skipping empty lessons.

    Returns None at the start of the course or for an unknown coordinate.
    """
    position = _locate(lessons, lesson_id, item_id)
    if position is None:
        return None
    lesson_idx, item_idx = position

    current = lessons[lesson_idx]
    if item_idx > 0:
        return NavigationTarget(current, current.learning_items[item_idx - 1])

    for lesson in reversed(lessons[:lesson_idx]):
        if lesson.learning_items:
            return NavigationTarget(lesson, lesson.learning_items[-1])
    return None


class NavigationResolver:
    """Course-level navigation; unknown course ids resolve to None."""

    def __init__(self, catalog: ContentCatalog):
        self.catalog = catalog

    def _lessons(self, course_id: str) -> list[Lesson]:
        course = self.catalog.get_course_by_id(course_id)
        return course.lessons if course else []

    def get_first_item(self, course_id: str) -> Optional[NavigationTarget]:
        return first_item(self._lessons(course_id))

    def get_next_item(self, course_id: str, lesson_id: str, item_id: str) -> Optional[NavigationTarget]:
        return next_item(self._lessons(course_id), lesson_id, item_id)

    def get_previous_item(self, course_id: str, lesson_id: str, item_id: str) -> Optional[NavigationTarget]:
        return previous_item(self._lessons(course_id), lesson_id, item_id)

    def get_item_position(self, course_id: str, lesson_id: str, item_id: str) -> tuple[int, int]:
        """
        Get item position as (current, total) across the whole course.

        Returns (0, total) if the item is not found.
        """
        lessons = self._lessons(course_id)
        total = sum(len(lesson.learning_items) for lesson in lessons)
        index = 0
        for lesson in lessons:
            for item in lesson.learning_items:
                index += 1
                if lesson.id == lesson_id and item.id == item_id:
                    return (index, total)
        return (0, total)


class ResumePointResolver:
    """
    Where a learner lands when re-entering a course.

    Priority:
    1. Last viewed item if not completed
    2. Item after the last viewed item if that one is completed
    3. First incomplete item in catalog order
    4. First item of the course (everything completed)
    """

    def __init__(self, progress: ProgressStore, navigator: NavigationResolver):
        self.progress = progress
        self.navigator = navigator

    def get_resume_point(self, course_id: str) -> Optional[ItemCoordinate]:
        """Resume coordinate, or None if the course is unknown or has no items."""
        course = self.navigator.catalog.get_course_by_id(course_id)
        if not course:
            return None

        last_viewed = self.progress.get_last_viewed_item(course_id)
        # A stale pointer (item removed from the catalog) falls through to the scan
        if last_viewed and _locate(course.lessons, last_viewed.lesson_id, last_viewed.item_id):
            if not self.progress.is_item_completed(last_viewed.item_id):
                return last_viewed

            following = next_item(course.lessons, last_viewed.lesson_id, last_viewed.item_id)
            if following:
                return following.coordinate

        for lesson in course.lessons:
            for item in lesson.learning_items:
                if not self.progress.is_item_completed(item.id):
                    return ItemCoordinate(lesson.id, item.id)

        first = first_item(course.lessons)
        return first.coordinate if first else None
