"""
Content catalog schemas for LearnPath.

Hierarchy: Course -> Lessons -> LearningItems. The catalog is read-only
once loaded. Traversal follows list order; the `order` fields are for
display only.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator

from .base import DocumentModel


LearningItemType = Literal["url", "video", "pdf"]
VideoSource = Literal["youtube", "vimeo", "direct"]
PdfSource = Literal["local", "external"]


def validate_unique_ids(ids: list[str], kind: str) -> None:
    """Raise ValueError if any id repeats within one parent."""
    seen = set()
    for item_id in ids:
        if item_id in seen:
            raise ValueError(f"Duplicate {kind} id: {item_id}")
        seen.add(item_id)


class LearningItem(DocumentModel):
    """A single piece of learning material (external link, video, or PDF)."""
    id: str
    title: str = ""
    description: Optional[str] = None
    type: LearningItemType
    order: int = 0

    url: Optional[str] = None
    video_url: Optional[str] = None
    video_source: Optional[VideoSource] = None
    video_duration: Optional[str] = None  # e.g. "10:30"
    pdf_url: Optional[str] = None
    pdf_source: Optional[PdfSource] = None

    estimated_time: Optional[int] = None  # minutes


class Lesson(DocumentModel):
    id: str
    title: str = ""
    description: str = ""
    order: int = 0
    learning_items: list[LearningItem] = []
    estimated_duration: Optional[str] = None
    is_free: bool = False  # preview lesson, open without course enrollment

    @field_validator("learning_items")
    @classmethod
    def item_ids_unique(cls, v):
        validate_unique_ids([item.id for item in v], "learning item")
        return v


class Instructor(DocumentModel):
    name: str
    title: str = ""
    avatar: Optional[str] = None


class Course(DocumentModel):
    id: str
    title: str = ""
    description: str = ""
    thumbnail: str = ""
    duration: str = ""
    difficulty: Literal["Beginner", "Intermediate", "Advanced"] = "Beginner"
    tags: list[str] = []
    roles: list[str] = []
    added_date: Optional[str] = None
    category: Optional[str] = None
    min_experience: Optional[int] = None
    max_experience: Optional[int] = None
    lessons: list[Lesson] = []
    instructor: Optional[Instructor] = None
    learning_outcomes: list[str] = []
    prerequisites: list[str] = []

    @field_validator("lessons")
    @classmethod
    def lesson_ids_unique(cls, v):
        validate_unique_ids([lesson.id for lesson in v], "lesson")
        return v

    @property
    def total_items(self) -> int:
        return sum(len(lesson.learning_items) for lesson in self.lessons)


class CoursesConfig(DocumentModel):
    """Root of courses.config.json."""
    courses: list[Course] = Field(default_factory=list)
