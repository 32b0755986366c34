"""
Progress tracking schemas for LearnPath.

A completion timestamp on ItemProgress is the only marker that an item
is done; type-specific sub-state may exist without it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import DocumentModel


class VideoProgress(DocumentModel):
    current_time: float = 0
    duration: float = 0
    completed: bool = False


class ItemProgress(DocumentModel):
    item_id: str
    lesson_id: str
    course_id: str
    completed_at: Optional[datetime] = None
    video_progress: Optional[VideoProgress] = None
    pdf_opened: Optional[bool] = None
    url_visited: Optional[bool] = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class CourseProgress(DocumentModel):
    course_id: str
    enrolled_at: datetime
    last_viewed_at: datetime
    last_lesson_id: Optional[str] = None
    last_item_id: Optional[str] = None

    completed_items: list[str] = []

    # Derived, stored for fast reads; rewritten on every mutation
    total_items: int = 0
    completed_count: int = 0
    progress_percentage: int = 0


class UserProgressStore(DocumentModel):
    courses: dict[str, CourseProgress] = Field(default_factory=dict)
    items: dict[str, ItemProgress] = Field(default_factory=dict)
    last_activity: Optional[datetime] = None
