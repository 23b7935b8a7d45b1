"""Conversion between domain models and their JSON-compatible dictionaries.

The dictionaries use the camelCase keys of the persisted library and of the
export file format, e.g. ``courseId`` or ``expectedAnswer``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from ecoquest_quiz.constants.quiz_constants import DEFAULT_POINTS
from ecoquest_quiz.core.models import (
    QUESTION_CLASSES,
    Course,
    QuestionType,
    Quiz,
    QuizOption,
    QuizQuestion,
    QuizStatus,
    ShortQuestion,
    has_options,
)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def option_to_dict(option: QuizOption) -> dict[str, Any]:
    return {"id": option.id, "text": option.text, "correct": option.correct}


def question_to_dict(question: QuizQuestion) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": question.id,
        "type": question.type.value,
        "prompt": question.prompt,
    }
    if has_options(question):
        data["options"] = [option_to_dict(option) for option in question.options]
    data["points"] = question.points
    if question.explanation is not None:
        data["explanation"] = question.explanation
    if isinstance(question, ShortQuestion) and question.expected_answer is not None:
        data["expectedAnswer"] = question.expected_answer
    return data


def quiz_to_dict(quiz: Quiz) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": quiz.id,
        "title": quiz.title,
        "description": quiz.description,
        "courseId": quiz.course_id,
        "teacherId": quiz.teacher_id,
        "status": quiz.status.value,
    }
    if quiz.time_limit_minutes is not None:
        data["timeLimitMinutes"] = quiz.time_limit_minutes
    data["questions"] = [question_to_dict(question) for question in quiz.questions]
    data["createdAt"] = format_timestamp(quiz.created_at)
    data["updatedAt"] = format_timestamp(quiz.updated_at)
    return data


def course_to_dict(course: Course) -> dict[str, Any]:
    return {"id": course.id, "name": course.name, "code": course.code}


def option_from_dict(data: Mapping[str, Any]) -> QuizOption:
    return QuizOption(
        id=str(data.get("id", "")),
        text=str(data.get("text", "")),
        correct=bool(data.get("correct", False)),
    )


def question_from_dict(data: Mapping[str, Any]) -> QuizQuestion:
    """Build the question variant named by ``data["type"]``.

    Raises ``ValueError`` for an unknown type and ``TypeError`` when the
    options are not a list.
    """
    question_type = QuestionType(data.get("type", QuestionType.MCQ.value))
    common: dict[str, Any] = {
        "id": str(data.get("id", "")),
        "prompt": str(data.get("prompt", "")),
        "points": int(data.get("points", DEFAULT_POINTS)),
        "explanation": data.get("explanation"),
    }
    if question_type is QuestionType.SHORT:
        expected = data.get("expectedAnswer")
        return ShortQuestion(**common, expected_answer=None if expected is None else str(expected))

    raw_options = data.get("options") or []
    if not isinstance(raw_options, list):
        raise TypeError("Question options must be a list.")
    options = [option_from_dict(option) for option in raw_options]
    return QUESTION_CLASSES[question_type](**common, options=options)


def quiz_from_dict(data: Mapping[str, Any]) -> Quiz:
    raw_questions = data["questions"]
    if not isinstance(raw_questions, list):
        raise TypeError("Quiz questions must be a list.")
    time_limit = data.get("timeLimitMinutes")
    return Quiz(
        id=str(data["id"]),
        title=str(data["title"]),
        description=str(data.get("description", "")),
        course_id=str(data.get("courseId", "")),
        teacher_id=str(data.get("teacherId", "")),
        status=QuizStatus(data.get("status", QuizStatus.DRAFT.value)),
        time_limit_minutes=None if time_limit is None else int(time_limit),
        questions=[question_from_dict(question) for question in raw_questions],
        created_at=parse_timestamp(data["createdAt"]),
        updated_at=parse_timestamp(data["updatedAt"]),
    )


def course_from_dict(data: Mapping[str, Any]) -> Course:
    return Course(id=str(data["id"]), name=str(data["name"]), code=str(data["code"]))
