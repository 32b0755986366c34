"""
Quiz schemas for LearnPath.

Defines quiz definitions (loaded from quizzes.config.json), persisted
attempts, and the computed QuizResult. Results are never stored; they are
recomputed from an attempt's answers and its quiz.
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import Field

from .base import DocumentModel


# Option index (0-based) for single-choice, "true"/"false" for true-false
AnswerValue = Union[str, int]

QuestionType = Literal["single-choice", "true-false"]


class QuizQuestion(DocumentModel):
    id: str
    type: QuestionType
    question: str = ""
    options: Optional[list[str]] = None
    correct_answer: AnswerValue
    explanation: Optional[str] = None
    points: float = Field(1, ge=0)


class Quiz(DocumentModel):
    id: str
    course_id: str
    title: str = ""
    description: str = ""
    passing_score: int = Field(..., ge=0, le=100)  # percentage
    time_limit: Optional[int] = Field(None, gt=0)  # minutes
    questions: list[QuizQuestion] = []


class QuizzesConfig(DocumentModel):
    """Root of quizzes.config.json."""
    quizzes: list[Quiz] = Field(default_factory=list)


class QuizAttempt(DocumentModel):
    quiz_id: str
    course_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    answers: dict[str, AnswerValue] = {}
    score: int = 0  # 0-100
    passed: bool = False
    time_taken: Optional[int] = None  # seconds


class QuestionResult(DocumentModel):
    question_id: str
    question: str
    user_answer: Optional[AnswerValue] = None
    correct_answer: AnswerValue
    is_correct: bool
    points: float
    earned_points: float
    explanation: Optional[str] = None


class QuizResult(DocumentModel):
    total_questions: int
    correct_answers: int
    wrong_answers: int
    score: int
    passed: bool
    passing_score: int
    time_taken: Optional[int] = None
    question_results: list[QuestionResult] = []
