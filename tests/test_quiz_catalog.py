from __future__ import annotations

from ecoquest_quiz.core.collaborators import StaticConfirmer
from ecoquest_quiz.core.models import QuizStatus
from ecoquest_quiz.core.quiz_catalog import filter_quizzes, toggle_publish, total_points


def test_search_matches_title_and_description(demo_store):
    quizzes = demo_store.quizzes
    assert [q.id for q in filter_quizzes(quizzes, search="RENEWABLE")] == ["quiz_renewable_energy"]
    assert [q.id for q in filter_quizzes(quizzes, search="impact")] == ["quiz_climate_basics"]
    assert filter_quizzes(quizzes, search="  ") == quizzes


def test_status_and_course_filters_combine(demo_store):
    quizzes = demo_store.quizzes
    assert [q.id for q in filter_quizzes(quizzes, status="draft")] == ["quiz_renewable_energy"]
    assert [q.id for q in filter_quizzes(quizzes, status=QuizStatus.PUBLISHED)] == ["quiz_climate_basics"]
    assert filter_quizzes(quizzes, status="draft", course_id="course_eco_101") == []


def test_total_points(demo_store):
    assert total_points(demo_store.get_quiz("quiz_climate_basics")) == 15


def test_publishing_requires_confirmation(demo_store):
    unchanged = toggle_publish(demo_store, "quiz_renewable_energy", StaticConfirmer(False))
    assert unchanged.status is QuizStatus.DRAFT
    assert demo_store.get_quiz("quiz_renewable_energy").status is QuizStatus.DRAFT

    published = toggle_publish(demo_store, "quiz_renewable_energy", StaticConfirmer(True))
    assert published.status is QuizStatus.PUBLISHED


def test_unpublishing_does_not_ask(demo_store):
    quiz = toggle_publish(demo_store, "quiz_climate_basics", StaticConfirmer(False))
    assert quiz.status is QuizStatus.DRAFT


def test_toggle_unknown_quiz(demo_store):
    assert toggle_publish(demo_store, "missing", StaticConfirmer(True)) is None
