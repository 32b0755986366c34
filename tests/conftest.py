"""Shared fixtures: a small catalog, quiz bank, in-memory storage, and a controllable clock."""

from datetime import datetime, timedelta, timezone

import pytest

from learnpath.assessment import AttemptStore
from learnpath.classroom import (
    ContentCatalog,
    DocumentStore,
    MemoryStorage,
    NavigationResolver,
    ProgressStore,
    QuizBank,
    ResumePointResolver,
)
from learnpath.schemas import CoursesConfig, QuizzesConfig


COURSES_DOCUMENT = {
    "courses": [
        {
            "id": "c1",
            "title": "Angular Fundamentals",
            "roles": ["Developer"],
            "lessons": [
                {
                    "id": "l1",
                    "order": 1,
                    "isFree": True,
                    "learningItems": [
                        {"id": "A", "type": "url", "order": 1, "url": "https://angular.dev"},
                        {"id": "B", "type": "video", "order": 2, "videoUrl": "https://example.com/b.mp4"},
                    ],
                },
                {"id": "l-empty", "order": 2, "learningItems": []},
                {
                    "id": "l2",
                    "order": 3,
                    "learningItems": [
                        {"id": "C", "type": "pdf", "order": 1, "pdfUrl": "c.pdf"},
                    ],
                },
            ],
        },
        {
            "id": "c2",
            "title": "Writing Requirements",
            "roles": ["Product Definition Analyst (PDA)"],
            "lessons": [
                {
                    "id": "m1",
                    "order": 1,
                    "learningItems": [
                        {"id": "X", "type": "url", "order": 1},
                        {"id": "Y", "type": "url", "order": 2},
                    ],
                },
            ],
        },
        {
            "id": "hollow",
            "title": "Coming Soon",
            "roles": ["Developer"],
            "lessons": [{"id": "h1", "order": 1, "learningItems": []}],
        },
    ]
}

QUIZZES_DOCUMENT = {
    "quizzes": [
        {
            "id": "quiz-c1",
            "courseId": "c1",
            "title": "Angular Check",
            "passingScore": 50,
            "timeLimit": 1,
            "questions": [
                {
                    "id": "q1",
                    "type": "single-choice",
                    "question": "Which decorator defines a component?",
                    "options": ["@Injectable", "@Component", "@Pipe"],
                    "correctAnswer": 1,
                    "points": 10,
                },
                {
                    "id": "q2",
                    "type": "true-false",
                    "question": "Signals are reactive.",
                    "correctAnswer": "true",
                    "points": 10,
                    "explanation": "Reading a signal tracks it.",
                },
            ],
        },
        {
            "id": "quiz-c2",
            "courseId": "c2",
            "passingScore": 70,
            "questions": [
                {"id": "r1", "type": "true-false", "correctAnswer": "false", "points": 5},
            ],
        },
    ]
}


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog():
    return ContentCatalog(CoursesConfig.model_validate(COURSES_DOCUMENT).courses)


@pytest.fixture
def quiz_bank():
    return QuizBank(QuizzesConfig.model_validate(QUIZZES_DOCUMENT).quizzes)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def documents(storage):
    return DocumentStore(storage)


@pytest.fixture
def progress(documents, catalog, clock):
    return ProgressStore(documents, catalog, clock=clock)


@pytest.fixture
def navigator(catalog):
    return NavigationResolver(catalog)


@pytest.fixture
def resume(progress, navigator):
    return ResumePointResolver(progress, navigator)


@pytest.fixture
def attempts(documents, quiz_bank, clock):
    return AttemptStore(documents, quiz_bank, clock=clock)


class BrokenStorage(MemoryStorage):
    """Medium whose writes and removals always fail."""

    def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")

    def remove_item(self, key: str) -> None:
        raise OSError("read-only medium")


@pytest.fixture
def broken_documents():
    return DocumentStore(BrokenStorage())
