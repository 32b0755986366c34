"""
LearnPath Schemas - Pydantic models for the learning-progress engine.

This module exports all schema classes for:
- Catalog: courses, lessons, learning items
- Progress: item and course progress, the user progress aggregate
- Quiz: quiz definitions, attempts, computed results
- Enrollment: the learner's enrollment record
"""

from .base import DocumentModel

# Catalog schemas
from .catalog import (
    LearningItemType,
    LearningItem,
    Lesson,
    Instructor,
    Course,
    CoursesConfig,
)

# Progress schemas
from .progress import (
    VideoProgress,
    ItemProgress,
    CourseProgress,
    UserProgressStore,
)

# Quiz schemas
from .quiz import (
    AnswerValue,
    QuestionType,
    QuizQuestion,
    Quiz,
    QuizzesConfig,
    QuizAttempt,
    QuestionResult,
    QuizResult,
)

# Enrollment schemas
from .enrollment import (
    Role,
    EnrollmentData,
)

__all__ = [
    'DocumentModel',
    # Catalog
    'LearningItemType',
    'LearningItem',
    'Lesson',
    'Instructor',
    'Course',
    'CoursesConfig',
    # Progress
    'VideoProgress',
    'ItemProgress',
    'CourseProgress',
    'UserProgressStore',
    # Quiz
    'AnswerValue',
    'QuestionType',
    'QuizQuestion',
    'Quiz',
    'QuizzesConfig',
    'QuizAttempt',
    'QuestionResult',
    'QuizResult',
    # Enrollment
    'Role',
    'EnrollmentData',
]
