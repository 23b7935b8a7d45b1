"""FastAPI server exposing the quiz library to learner clients."""

from __future__ import annotations

from threading import Thread
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from pydantic import BaseModel, Field
import uvicorn

from ecoquest_quiz.constants.about import APP_NAME, APP_VERSION
from ecoquest_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from ecoquest_quiz.core.answer_sheet import AnswerSheet
from ecoquest_quiz.core.errors import QuizImportError, QuizStorageError
from ecoquest_quiz.core.markdown_math_renderer import renderer
from ecoquest_quiz.core.models import Quiz, QuizStatus, ShortQuestion, has_options
from ecoquest_quiz.core.quiz_catalog import filter_quizzes, total_points
from ecoquest_quiz.core.quiz_codec import format_timestamp, quiz_to_dict
from ecoquest_quiz.core.services.quiz_store import QuizDataStore
from ecoquest_quiz.core.session_state import UserSession


class AnswerPayload(BaseModel):
    """One answered question of a submission."""

    question_id: str
    selected_options: list[str] = Field(default_factory=list)
    text_answer: str | None = None


class SubmissionPayload(BaseModel):
    """Payload schema for a completed quiz attempt."""

    answers: list[AnswerPayload] = Field(default_factory=list)


def _get_dependency(value: Any):
    def dependency() -> Any:
        return value

    return dependency


def _quiz_summary(quiz: Quiz) -> dict[str, object]:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "description": quiz.description,
        "course_id": quiz.course_id,
        "status": quiz.status.value,
        "question_count": len(quiz.questions),
        "total_points": total_points(quiz),
        "time_limit_minutes": quiz.time_limit_minutes,
        "updated_at": format_timestamp(quiz.updated_at),
    }


def _learner_view(quiz: Quiz) -> dict[str, object]:
    """Quiz as shown to a learner: rendered prompts, no answer keys."""
    questions = []
    for question in quiz.questions:
        entry: dict[str, object] = {
            "id": question.id,
            "type": question.type.value,
            "prompt_html": renderer.render_fragment(question.prompt),
            "points": question.points,
        }
        if has_options(question):
            entry["options"] = [{"id": option.id, "text": option.text} for option in question.options]
        questions.append(entry)
    return {**_quiz_summary(quiz), "questions": questions}


def _require_quiz(store: QuizDataStore, quiz_id: str) -> Quiz:
    quiz = store.get_quiz(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail=f"Quiz {quiz_id} not found")
    return quiz


def create_api_app(store: QuizDataStore, session: UserSession) -> FastAPI:
    """Create a FastAPI application wired to the provided store and session."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    store_dep = _get_dependency(store)
    session_dep = _get_dependency(session)

    @app.get("/api/courses")
    def list_courses(quiz_store: QuizDataStore = Depends(store_dep)) -> list[dict[str, str]]:
        return [{"id": c.id, "name": c.name, "code": c.code} for c in quiz_store.courses]

    @app.get("/api/quizzes")
    def list_quizzes(
        search: str = "",
        status: QuizStatus | None = None,
        course_id: str | None = Query(default=None),
        quiz_store: QuizDataStore = Depends(store_dep),
    ) -> list[dict[str, object]]:
        quizzes = filter_quizzes(quiz_store.quizzes, search=search, status=status, course_id=course_id)
        return [_quiz_summary(quiz) for quiz in quizzes]

    @app.get("/api/quizzes/{quiz_id}")
    def get_quiz(quiz_id: str, quiz_store: QuizDataStore = Depends(store_dep)) -> dict[str, object]:
        return _learner_view(_require_quiz(quiz_store, quiz_id))

    @app.post("/api/quizzes/{quiz_id}/submissions")
    def submit_quiz(
        quiz_id: str,
        payload: SubmissionPayload,
        quiz_store: QuizDataStore = Depends(store_dep),
        user_session: UserSession = Depends(session_dep),
    ) -> dict[str, object]:
        quiz = _require_quiz(quiz_store, quiz_id)
        sheet = AnswerSheet(quiz)
        try:
            for item in payload.answers:
                sheet.record(item.question_id, item.selected_options, item.text_answer)
        except (KeyError, ValueError) as exc:
            raise HTTPException(status_code=422, detail=exc.args[0]) from exc
        score = sheet.score()
        profile = user_session.apply(user_session.current.add_xp(score.percentage))

        questions_by_id = {question.id: question for question in quiz.questions}
        results = []
        for result in score.question_results:
            question = questions_by_id[result.question_id]
            entry: dict[str, object] = {
                "question_id": result.question_id,
                "outcome": result.outcome.value,
                "points_awarded": result.points_awarded,
                "points_possible": result.points_possible,
                "explanation_html": renderer.render_optional(question.explanation),
            }
            if isinstance(question, ShortQuestion):
                entry["expected_answer"] = question.expected_answer
            else:
                entry["correct_options"] = [o.id for o in question.options if o.correct]
            results.append(entry)

        return {
            "quiz_id": quiz.id,
            "total_points": score.total_points,
            "earned_points": score.earned_points,
            "percentage": score.percentage,
            "xp_earned": score.percentage,
            "level": profile.level,
            "results": results,
        }

    @app.get("/api/quizzes/{quiz_id}/export")
    def export_quiz(quiz_id: str, quiz_store: QuizDataStore = Depends(store_dep)) -> Response:
        export = quiz_store.export_quiz(quiz_id)
        if export is None:
            raise HTTPException(status_code=404, detail=f"Quiz {quiz_id} not found")
        return Response(
            content=export.content,
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
        )

    @app.post("/api/quizzes/import", status_code=201)
    def import_quiz(
        payload: dict[str, Any],
        quiz_store: QuizDataStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            quiz = quiz_store.import_quiz(payload)
        except QuizImportError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except QuizStorageError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return quiz_to_dict(quiz)

    @app.get("/api/session")
    def get_session(user_session: UserSession = Depends(session_dep)) -> dict[str, object]:
        return user_session.current.to_dict()

    @app.post("/api/session/impersonate/{user_id}")
    def impersonate(user_id: str, user_session: UserSession = Depends(session_dep)) -> dict[str, object]:
        profile = user_session.impersonate(user_id)
        if profile is None:
            raise HTTPException(status_code=404, detail=f"Unknown demo user {user_id}")
        return profile.to_dict()

    return app


def start_api_server(
    store: QuizDataStore,
    session: UserSession,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(store, session)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
