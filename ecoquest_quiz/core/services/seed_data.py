"""Built-in sample courses and quizzes used to seed an empty library."""

from __future__ import annotations

from datetime import datetime, timezone

from ecoquest_quiz.constants.storage_constants import DEFAULT_AUTHOR_ID
from ecoquest_quiz.core.models import (
    Course,
    McqQuestion,
    MultiQuestion,
    Quiz,
    QuizOption,
    QuizStatus,
    TrueFalseQuestion,
)


def sample_courses() -> list[Course]:
    return [
        Course(id="course_eco_101", name="Environmental Science 101", code="ECO101"),
        Course(id="course_eco_102", name="Climate Change Studies", code="ECO102"),
        Course(id="course_eco_201", name="Sustainable Development", code="ECO201"),
        Course(id="course_bio_101", name="Biology Fundamentals", code="BIO101"),
    ]


def sample_quizzes() -> list[Quiz]:
    """Return fresh copies of the demo quizzes."""
    return [
        Quiz(
            id="quiz_climate_basics",
            title="Climate Change Basics",
            description="Understanding the fundamentals of climate change and its impact",
            course_id="course_eco_101",
            teacher_id=DEFAULT_AUTHOR_ID,
            status=QuizStatus.PUBLISHED,
            time_limit_minutes=15,
            questions=[
                McqQuestion(
                    id="q_climate_1",
                    prompt="What is the primary cause of current climate change?",
                    options=[
                        QuizOption(id="o1", text="Natural climate cycles"),
                        QuizOption(id="o2", text="Human activities and greenhouse gas emissions", correct=True),
                        QuizOption(id="o3", text="Solar radiation changes"),
                        QuizOption(id="o4", text="Volcanic activity"),
                    ],
                    points=10,
                    explanation=(
                        "Human activities, particularly burning fossil fuels, "
                        "are the primary driver of current climate change."
                    ),
                ),
                TrueFalseQuestion(
                    id="q_climate_2",
                    prompt="CO2 levels in the atmosphere are at their highest in human history.",
                    options=[
                        QuizOption(id="t1", text="True", correct=True),
                        QuizOption(id="f1", text="False"),
                    ],
                    points=5,
                    explanation="CO2 levels have reached over 410 ppm, the highest in over 800,000 years.",
                ),
            ],
            created_at=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
        ),
        Quiz(
            id="quiz_renewable_energy",
            title="Renewable Energy Sources",
            description="Exploring different types of renewable energy and their benefits",
            course_id="course_eco_102",
            teacher_id=DEFAULT_AUTHOR_ID,
            status=QuizStatus.DRAFT,
            time_limit_minutes=20,
            questions=[
                MultiQuestion(
                    id="q_renewable_1",
                    prompt="Which of the following are renewable energy sources? (Select all that apply)",
                    options=[
                        QuizOption(id="r1", text="Solar power", correct=True),
                        QuizOption(id="r2", text="Wind power", correct=True),
                        QuizOption(id="r3", text="Coal"),
                        QuizOption(id="r4", text="Hydroelectric power", correct=True),
                        QuizOption(id="r5", text="Natural gas"),
                    ],
                    points=15,
                    explanation="Solar, wind, and hydroelectric are all renewable sources that naturally replenish.",
                ),
            ],
            created_at=datetime(2024, 1, 10, 14, 30, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 12, 9, 15, tzinfo=timezone.utc),
        ),
    ]
