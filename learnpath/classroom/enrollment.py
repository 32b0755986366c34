"""
EnrollmentStore - The learner's enrollment record and content access rules.

Access rules:
- Course details are visible to anyone enrolled in the app
- Lesson content needs course enrollment, unless the lesson is a free preview
"""

import logging
from typing import Optional

from learnpath.schemas import Course, EnrollmentData, Role
from learnpath.utils import Clock, utc_now

from .catalog import ContentCatalog
from .storage import DocumentStore


logger = logging.getLogger(__name__)

DEFAULT_ENROLLMENT_KEY = "learnpath_enrollment"


class EnrollmentStore:
    """Persisted enrollment record (None until the learner enrolls)."""

    def __init__(
        self,
        documents: DocumentStore,
        catalog: ContentCatalog,
        key: str = DEFAULT_ENROLLMENT_KEY,
        clock: Clock = utc_now,
    ):
        self.documents = documents
        self.catalog = catalog
        self.key = key
        self.clock = clock
        self._data: Optional[EnrollmentData] = documents.load(
            key, Optional[EnrollmentData], lambda: None
        )

    def _save(self, data: EnrollmentData) -> None:
        self.documents.save(self.key, data)
        self._data = data

    # -------------------------------------------------------------------------
    # Enrollment
    # -------------------------------------------------------------------------

    def enroll(
        self,
        name: str,
        age: int,
        email: str,
        role: Role | str,
        years_of_experience: int,
    ) -> EnrollmentData:
        """Create the enrollment record with no courses selected."""
        data = EnrollmentData(
            name=name,
            age=age,
            email=email,
            role=role,
            years_of_experience=years_of_experience,
            enrolled_courses=[],
            enrollment_date=self.clock(),
        )
        self._save(data)
        logger.info(f"Enrolled {email} as {data.role.value}")
        return data

    def get_enrollment_data(self) -> Optional[EnrollmentData]:
        return self._data.model_copy(deep=True) if self._data else None

    def is_enrolled(self) -> bool:
        return self._data is not None

    @property
    def enrolled_course_ids(self) -> list[str]:
        return list(self._data.enrolled_courses) if self._data else []

    def select_courses(self, course_ids: list[str]) -> None:
        """Replace the enrolled course list. No-op before app enrollment."""
        if not self._data:
            logger.warning("Cannot select courses before enrolling")
            return
        unique_ids = list(dict.fromkeys(course_ids))
        self._save(self._data.model_copy(update={"enrolled_courses": unique_ids}))

    def enroll_in_course(self, course_id: str) -> None:
        if course_id not in self.enrolled_course_ids:
            self.select_courses([*self.enrolled_course_ids, course_id])

    def unenroll_from_course(self, course_id: str) -> None:
        if course_id in self.enrolled_course_ids:
            self.select_courses([cid for cid in self.enrolled_course_ids if cid != course_id])

    def is_enrolled_in_course(self, course_id: str) -> bool:
        return course_id in self.enrolled_course_ids

    def clear(self) -> None:
        """Forget the in-memory record. The caller removes the persisted document."""
        self._data = None

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def can_view_course(self) -> bool:
        return self.is_enrolled()

    def can_access_lesson(self, course_id: str, lesson_id: Optional[str] = None) -> bool:
        if not self.is_enrolled():
            return False
        if self.is_enrolled_in_course(course_id):
            return True
        if lesson_id:
            lesson = self.catalog.get_lesson_by_id(course_id, lesson_id)
            return bool(lesson and lesson.is_free)
        return False

    def courses_for_role(self) -> list[Course]:
        """Catalog courses offered to the learner's role."""
        if not self._data:
            return []
        return self.catalog.courses_for_role(self._data.role.value)
