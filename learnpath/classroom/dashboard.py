"""
Dashboard - Per-course status summaries for a learner.

Everything here is derived on demand from the catalog, progress, and
attempt history; nothing is stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from learnpath.schemas import Course
from learnpath.utils import round_half_up, round_percent

from .catalog import ContentCatalog, QuizBank
from .progress import ProgressStore

if TYPE_CHECKING:
    from learnpath.assessment import AttemptStore


class CourseStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class QuizStatus(str, Enum):
    LOCKED = "locked"           # Course not finished yet (or no quiz)
    AVAILABLE = "available"     # Course finished, never attempted
    FAILED = "failed"           # Attempted, never passed
    PASSED = "passed"


# In-progress first, then not-started, then completed
_STATUS_ORDER = {
    CourseStatus.IN_PROGRESS: 0,
    CourseStatus.NOT_STARTED: 1,
    CourseStatus.COMPLETED: 2,
}


@dataclass
class CourseSummary:
    course: Course
    lessons_completed: int
    total_lessons: int
    items_completed: int
    total_items: int
    percent_complete: int
    status: CourseStatus
    quiz_status: QuizStatus
    quiz_score: Optional[int]
    last_viewed_at: Optional[datetime]


@dataclass
class DashboardSummary:
    courses: list[CourseSummary] = field(default_factory=list)
    overall_completion: int = 0
    quizzes_passed: int = 0
    quizzes_failed: int = 0
    average_quiz_score: int = 0

    def by_status(self, status: CourseStatus) -> list[CourseSummary]:
        return [c for c in self.courses if c.status == status]


def summarize_course(
    course: Course,
    progress: ProgressStore,
    attempts: "AttemptStore",
    quiz_bank: QuizBank,
) -> CourseSummary:
    """Build the status summary of one course."""
    course_progress = progress.get_course_progress(course.id)
    completed_items = set(course_progress.completed_items) if course_progress else set()

    # A lesson is complete when all of its items are
    lessons_completed = sum(
        1 for lesson in course.lessons
        if lesson.learning_items
        and all(item.id in completed_items for item in lesson.learning_items)
    )

    percent = progress.get_course_completion_percentage(course.id)
    if percent == 100:
        status = CourseStatus.COMPLETED
    elif percent > 0:
        status = CourseStatus.IN_PROGRESS
    else:
        status = CourseStatus.NOT_STARTED

    quiz_status = QuizStatus.LOCKED
    quiz_score = None
    quiz = quiz_bank.get_quiz_by_course_id(course.id)
    if quiz and status == CourseStatus.COMPLETED:
        if attempts.has_passed(quiz.id):
            quiz_status = QuizStatus.PASSED
        elif attempts.has_attempted(quiz.id):
            quiz_status = QuizStatus.FAILED
        else:
            quiz_status = QuizStatus.AVAILABLE
        quiz_score = attempts.best_score(quiz.id)

    return CourseSummary(
        course=course,
        lessons_completed=lessons_completed,
        total_lessons=len(course.lessons),
        items_completed=len(completed_items),
        total_items=course.total_items,
        percent_complete=percent,
        status=status,
        quiz_status=quiz_status,
        quiz_score=quiz_score,
        last_viewed_at=course_progress.last_viewed_at if course_progress else None,
    )


def _sort_key(summary: CourseSummary):
    viewed = summary.last_viewed_at.timestamp() if summary.last_viewed_at else float("-inf")
    return (_STATUS_ORDER[summary.status], -viewed)


def build_dashboard(
    catalog: ContentCatalog,
    progress: ProgressStore,
    attempts: "AttemptStore",
    quiz_bank: QuizBank,
    role: Optional[str] = None,
) -> DashboardSummary:
    """
    Summarize every course offered to a role (all courses if role is None).

    Courses are sorted in-progress, not-started, completed, and by most
    recent view within each group.
    """
    courses = catalog.courses_for_role(role) if role else catalog.get_all_courses()
    summaries = sorted(
        (summarize_course(course, progress, attempts, quiz_bank) for course in courses),
        key=_sort_key,
    )

    passed = failed = 0
    best_scores = []
    for course in courses:
        quiz = quiz_bank.get_quiz_by_course_id(course.id)
        if not quiz:
            continue
        if attempts.has_passed(quiz.id):
            passed += 1
        elif attempts.has_attempted(quiz.id):
            failed += 1
        best = attempts.best_score(quiz.id)
        if best is not None:
            best_scores.append(best)

    completed_courses = sum(1 for s in summaries if s.status == CourseStatus.COMPLETED)

    return DashboardSummary(
        courses=summaries,
        overall_completion=round_percent(completed_courses, len(summaries)),
        quizzes_passed=passed,
        quizzes_failed=failed,
        average_quiz_score=round_half_up(sum(best_scores) / len(best_scores)) if best_scores else 0,
    )
