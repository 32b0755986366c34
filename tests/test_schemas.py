"""
Schema validation tests for LearnPath.

Tests the Pydantic models to ensure they validate correctly and read
and write the camelCase document format.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from learnpath.schemas import (
    # Catalog
    LearningItem,
    Lesson,
    Course,
    CoursesConfig,
    # Progress
    VideoProgress,
    ItemProgress,
    CourseProgress,
    UserProgressStore,
    # Quiz
    QuizQuestion,
    Quiz,
    QuizzesConfig,
    QuizAttempt,
    # Enrollment
    Role,
    EnrollmentData,
)


class TestCatalogSchemas:
    """Test course catalog schemas."""

    def test_learning_item_from_camel_case(self):
        item = LearningItem.model_validate({
            "id": "intro",
            "type": "video",
            "videoUrl": "https://example.com/intro.mp4",
            "videoSource": "direct",
            "estimatedTime": 12,
        })
        assert item.video_url == "https://example.com/intro.mp4"
        assert item.video_source == "direct"
        assert item.estimated_time == 12

    def test_learning_item_accepts_snake_case(self):
        item = LearningItem(id="doc", type="pdf", pdf_url="doc.pdf")
        assert item.pdf_url == "doc.pdf"

    def test_learning_item_invalid_type(self):
        with pytest.raises(ValidationError):
            LearningItem(id="x", type="podcast")

    def test_lesson_duplicate_item_ids(self):
        with pytest.raises(ValidationError):
            Lesson(
                id="l1",
                learning_items=[
                    LearningItem(id="a", type="url"),
                    LearningItem(id="a", type="pdf"),
                ],
            )

    def test_course_duplicate_lesson_ids(self):
        with pytest.raises(ValidationError):
            Course(id="c", lessons=[Lesson(id="l1"), Lesson(id="l1")])

    def test_course_total_items(self):
        course = Course(
            id="c",
            lessons=[
                Lesson(id="l1", learning_items=[LearningItem(id="a", type="url")]),
                Lesson(id="l2"),
                Lesson(id="l3", learning_items=[
                    LearningItem(id="b", type="url"),
                    LearningItem(id="c", type="pdf"),
                ]),
            ],
        )
        assert course.total_items == 3

    def test_courses_config_is_free_alias(self):
        config = CoursesConfig.model_validate({
            "courses": [{"id": "c", "lessons": [{"id": "l1", "isFree": True}]}]
        })
        assert config.courses[0].lessons[0].is_free is True


class TestProgressSchemas:
    """Test progress-related schemas."""

    def test_item_progress_completion_marker(self):
        started = ItemProgress(item_id="a", lesson_id="l1", course_id="c", url_visited=True)
        assert not started.is_completed

        done = ItemProgress(
            item_id="a",
            lesson_id="l1",
            course_id="c",
            completed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        assert done.is_completed

    def test_video_progress_defaults(self):
        video = VideoProgress()
        assert video.current_time == 0
        assert video.completed is False

    def test_store_dumps_camel_case(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        store = UserProgressStore(
            courses={"c": CourseProgress(course_id="c", enrolled_at=now, last_viewed_at=now)},
            last_activity=now,
        )
        dumped = store.model_dump(by_alias=True, exclude_none=True)
        assert "lastActivity" in dumped
        assert dumped["courses"]["c"]["progressPercentage"] == 0
        assert "lastItemId" not in dumped["courses"]["c"]

    def test_store_reads_its_own_output(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        store = UserProgressStore(
            items={"a": ItemProgress(item_id="a", lesson_id="l1", course_id="c", completed_at=now)},
        )
        restored = UserProgressStore.model_validate_json(store.model_dump_json(by_alias=True))
        assert restored.items["a"].completed_at == now


class TestQuizSchemas:
    """Test quiz schemas."""

    def test_quiz_from_camel_case(self):
        quiz = Quiz.model_validate({
            "id": "q",
            "courseId": "c",
            "passingScore": 70,
            "timeLimit": 15,
            "questions": [
                {"id": "q1", "type": "single-choice", "correctAnswer": 2, "points": 5},
                {"id": "q2", "type": "true-false", "correctAnswer": "false"},
            ],
        })
        assert quiz.course_id == "c"
        assert quiz.time_limit == 15
        assert quiz.questions[0].correct_answer == 2
        assert quiz.questions[1].correct_answer == "false"
        assert quiz.questions[1].points == 1

    def test_correct_answer_keeps_representation(self):
        assert QuizQuestion(id="q", type="single-choice", correct_answer="0").correct_answer == "0"
        assert QuizQuestion(id="q", type="single-choice", correct_answer=0).correct_answer == 0

    def test_passing_score_range(self):
        with pytest.raises(ValidationError):
            Quiz(id="q", course_id="c", passing_score=120)

    def test_negative_points_rejected(self):
        with pytest.raises(ValidationError):
            QuizQuestion(id="q", type="true-false", correct_answer="true", points=-1)

    def test_non_positive_time_limit_rejected(self):
        with pytest.raises(ValidationError):
            Quiz(id="q", course_id="c", passing_score=50, time_limit=0)

    def test_empty_quizzes_config(self):
        assert QuizzesConfig().quizzes == []

    def test_attempt_defaults(self):
        attempt = QuizAttempt(
            quiz_id="q",
            course_id="c",
            started_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        assert attempt.completed_at is None
        assert attempt.score == 0
        assert attempt.passed is False
        assert attempt.answers == {}


class TestEnrollmentSchemas:
    """Test enrollment record schema."""

    def test_role_values(self):
        assert Role("Developer") == Role.DEVELOPER
        assert Role.PRODUCT_ANALYST.value == "Product Definition Analyst (PDA)"

    def test_enrollment_from_camel_case(self):
        data = EnrollmentData.model_validate({
            "name": "Ada",
            "age": 36,
            "email": "ada@example.com",
            "role": "Developer",
            "yearsOfExperience": 10,
            "enrolledCourses": ["c1"],
            "enrollmentDate": "2024-01-01T00:00:00Z",
        })
        assert data.role == Role.DEVELOPER
        assert data.enrolled_courses == ["c1"]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            EnrollmentData(
                name="Ada",
                age=36,
                email="ada@example.com",
                role="Manager",
                years_of_experience=1,
                enrollment_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )

    def test_negative_age_rejected(self):
        with pytest.raises(ValidationError):
            EnrollmentData(
                name="Ada",
                age=-1,
                email="ada@example.com",
                role=Role.DEVELOPER,
                years_of_experience=1,
                enrollment_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )
