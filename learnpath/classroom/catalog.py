"""
ContentCatalog and QuizBank - Read-only lookups over loaded content.

Both are immutable once built. Unknown ids return None (or 0 for counts)
rather than raising, so stale references degrade to "not found".
"""

from dataclasses import dataclass
from typing import Optional

from learnpath.schemas import Course, Lesson, LearningItem, Quiz


@dataclass(frozen=True)
class ItemCoordinate:
    """Position of a learning item inside a course."""
    lesson_id: str
    item_id: str


class ContentCatalog:
    """Lookup by id and array position over Course -> Lesson -> LearningItem."""

    def __init__(self, courses: list[Course]):
        self._courses = tuple(courses)
        self._by_id = {course.id: course for course in self._courses}

    def __len__(self) -> int:
        return len(self._courses)

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def get_all_courses(self) -> list[Course]:
        return list(self._courses)

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        return self._by_id.get(course_id)

    def courses_for_role(self, role: str) -> list[Course]:
        """Courses whose role list includes the given role."""
        return [course for course in self._courses if role in course.roles]

    # -------------------------------------------------------------------------
    # Lessons and items
    # -------------------------------------------------------------------------

    def get_lesson_by_id(self, course_id: str, lesson_id: str) -> Optional[Lesson]:
        course = self.get_course_by_id(course_id)
        if not course:
            return None
        return next((lesson for lesson in course.lessons if lesson.id == lesson_id), None)

    def get_learning_item_by_id(
        self, course_id: str, lesson_id: str, item_id: str
    ) -> Optional[LearningItem]:
        lesson = self.get_lesson_by_id(course_id, lesson_id)
        if not lesson:
            return None
        return next((item for item in lesson.learning_items if item.id == item_id), None)

    def get_total_items_in_course(self, course_id: str) -> int:
        course = self.get_course_by_id(course_id)
        return course.total_items if course else 0

    def get_total_lessons_in_course(self, course_id: str) -> int:
        course = self.get_course_by_id(course_id)
        return len(course.lessons) if course else 0

    def get_item_ids(self, course_id: str) -> set[str]:
        """All learning item ids currently in a course."""
        course = self.get_course_by_id(course_id)
        if not course:
            return set()
        return {
            item.id
            for lesson in course.lessons
            for item in lesson.learning_items
        }


class QuizBank:
    """Lookup over loaded quiz definitions."""

    def __init__(self, quizzes: list[Quiz]):
        self._quizzes = tuple(quizzes)
        self._by_id = {quiz.id: quiz for quiz in self._quizzes}

    def __len__(self) -> int:
        return len(self._quizzes)

    def get_all_quizzes(self) -> list[Quiz]:
        return list(self._quizzes)

    def get_quiz_by_id(self, quiz_id: str) -> Optional[Quiz]:
        return self._by_id.get(quiz_id)

    def get_quiz_by_course_id(self, course_id: str) -> Optional[Quiz]:
        """First quiz attached to a course, if any."""
        return next((quiz for quiz in self._quizzes if quiz.course_id == course_id), None)
