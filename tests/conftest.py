from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from ecoquest_quiz.core.models import (
    McqQuestion,
    MultiQuestion,
    QuizDraft,
    QuizOption,
    ShortQuestion,
    TrueFalseQuestion,
)
from ecoquest_quiz.core.question_editor import QuestionEditor
from ecoquest_quiz.core.services.quiz_store import QuizDataStore
from ecoquest_quiz.core.services.storage import MemoryStorage


class SequentialIds:
    """Predictable id factory: ``q_1``, ``o_2``, ..."""

    def __init__(self) -> None:
        self._counter = count(1)

    def __call__(self, prefix: str) -> str:
        return f"{prefix}_{next(self._counter)}"


class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self) -> None:
        self._now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def editor(ids: SequentialIds) -> QuestionEditor:
    return QuestionEditor(ids)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> QuizDataStore:
    return QuizDataStore(storage, clock=TickingClock())


@pytest.fixture
def demo_store(storage: MemoryStorage) -> QuizDataStore:
    return QuizDataStore(storage, demo_mode=True, clock=TickingClock())


@pytest.fixture
def mcq() -> McqQuestion:
    return McqQuestion(
        id="q_mcq",
        prompt="What is the primary cause of current climate change?",
        points=10,
        options=[
            QuizOption(id="o1", text="Natural climate cycles"),
            QuizOption(id="o2", text="Greenhouse gas emissions", correct=True),
            QuizOption(id="o3", text="Solar radiation changes"),
            QuizOption(id="o4", text="Volcanic activity"),
        ],
    )


@pytest.fixture
def multi() -> MultiQuestion:
    return MultiQuestion(
        id="q_multi",
        prompt="Which are renewable energy sources?",
        points=15,
        options=[
            QuizOption(id="r1", text="Solar power", correct=True),
            QuizOption(id="r2", text="Wind power", correct=True),
            QuizOption(id="r3", text="Coal"),
            QuizOption(id="r4", text="Hydroelectric power", correct=True),
            QuizOption(id="r5", text="Natural gas"),
        ],
    )


@pytest.fixture
def truefalse() -> TrueFalseQuestion:
    return TrueFalseQuestion(
        id="q_tf",
        prompt="CO2 levels are at their highest in human history.",
        options=[QuizOption(id="t", text="True", correct=True), QuizOption(id="f", text="False")],
    )


@pytest.fixture
def short() -> ShortQuestion:
    return ShortQuestion(id="q_short", prompt="Capital of France?", expected_answer="Paris")


@pytest.fixture
def draft(mcq, multi, truefalse, short) -> QuizDraft:
    return QuizDraft(
        title="Climate Change Basics",
        description="Fundamentals of climate change",
        course_id="course_eco_101",
        time_limit_minutes=15,
        questions=[mcq, multi, truefalse, short],
    )
