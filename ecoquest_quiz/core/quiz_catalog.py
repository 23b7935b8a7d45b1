"""Listing helpers for the quiz library: filtering, totals and publishing."""

from __future__ import annotations

from typing import Iterable

from ecoquest_quiz.core.collaborators import Confirmer
from ecoquest_quiz.core.models import Quiz, QuizStatus
from ecoquest_quiz.core.services.quiz_store import QuizDataStore

PUBLISH_WARNING = (
    "This will mark the quiz as published in the library only. "
    "Learners will not receive it automatically. Continue?"
)


def filter_quizzes(
    quizzes: Iterable[Quiz],
    search: str = "",
    status: QuizStatus | str | None = None,
    course_id: str | None = None,
) -> list[Quiz]:
    """Return the quizzes matching every given filter, keeping their order.

    ``search`` matches case-insensitively against title and description.
    """
    needle = search.strip().lower()
    wanted_status = QuizStatus(status) if status else None
    return [
        quiz
        for quiz in quizzes
        if (not needle or needle in quiz.title.lower() or needle in quiz.description.lower())
        and (wanted_status is None or quiz.status is wanted_status)
        and (not course_id or quiz.course_id == course_id)
    ]


def total_points(quiz: Quiz) -> int:
    return sum(question.points for question in quiz.questions)


def toggle_publish(store: QuizDataStore, quiz_id: str, confirmer: Confirmer) -> Quiz | None:
    """Flip a quiz between draft and published.

    Publishing asks for confirmation first; declining leaves the quiz as it
    is and returns it unchanged.
    """
    quiz = store.get_quiz(quiz_id)
    if quiz is None:
        return None
    if quiz.status is QuizStatus.PUBLISHED:
        return store.update_quiz(quiz_id, status=QuizStatus.DRAFT)
    if not confirmer.confirm("Publish Quiz", PUBLISH_WARNING):
        return quiz
    return store.update_quiz(quiz_id, status=QuizStatus.PUBLISHED)
