"""
Quiz scoring - Pure grading of a submitted answer map.

Scoring depends only on the quiz definition and the answers, so a stored
attempt can be re-graded at any later time with the same outcome.

Answer matching:
- Strings compare case-insensitively (lowercased, not trimmed)
- Everything else compares by value
- A string never matches a number ("0" != 0)
- A missing answer is simply wrong
"""

from typing import Any, Optional

from learnpath.schemas import AnswerValue, QuestionResult, Quiz, QuizResult
from learnpath.utils import round_percent


def normalize_answer(value: Any) -> Any:
    """Lowercase strings; leave other values untouched."""
    if isinstance(value, str):
        return value.lower()
    return value


def answers_match(submitted: Optional[AnswerValue], correct: AnswerValue) -> bool:
    """Exact representational match after lowercasing strings."""
    if submitted is None:
        return False
    if isinstance(submitted, str) != isinstance(correct, str):
        return False
    if isinstance(submitted, bool) != isinstance(correct, bool):
        return False
    return normalize_answer(submitted) == normalize_answer(correct)


def calculate_quiz_score(quiz: Quiz, answers: dict[str, AnswerValue]) -> QuizResult:
    """
    Grade answers against a quiz.

    Args:
        quiz: Quiz definition
        answers: question id -> submitted answer

    Returns:
        QuizResult with per-question breakdown. Full points per correct
        question, none otherwise; score is 0 when the quiz has no points.
    """
    question_results = []
    total_points = 0.0
    earned_points = 0.0

    for question in quiz.questions:
        user_answer = answers.get(question.id)
        is_correct = answers_match(user_answer, question.correct_answer)
        earned = question.points if is_correct else 0

        total_points += question.points
        earned_points += earned

        question_results.append(QuestionResult(
            question_id=question.id,
            question=question.question,
            user_answer=user_answer,
            correct_answer=question.correct_answer,
            is_correct=is_correct,
            points=question.points,
            earned_points=earned,
            explanation=question.explanation,
        ))

    score = round_percent(earned_points, total_points)
    correct_count = sum(1 for r in question_results if r.is_correct)

    return QuizResult(
        total_questions=len(quiz.questions),
        correct_answers=correct_count,
        wrong_answers=len(question_results) - correct_count,
        score=score,
        passed=score >= quiz.passing_score,
        passing_score=quiz.passing_score,
        question_results=question_results,
    )
