from __future__ import annotations

import json

from ecoquest_quiz.constants.storage_constants import CURRENT_USER_KEY
from ecoquest_quiz.core.services.storage import MemoryStorage
from ecoquest_quiz.core.session_state import LearnerProfile, UserRole, UserSession


def _fresh() -> LearnerProfile:
    return LearnerProfile(id="u", name="Sam", role=UserRole.STUDENT)


def test_add_xp_levels_up_repeatedly():
    profile = _fresh().add_xp(250)
    # 100 then 120 consumed, next threshold floor(120 * 1.2)
    assert (profile.level, profile.xp, profile.xp_to_next_level) == (3, 30, 144)


def test_add_xp_below_threshold():
    profile = _fresh().add_xp(99)
    assert (profile.level, profile.xp, profile.xp_to_next_level) == (1, 99, 100)


def test_demo_student_backlog_is_settled_on_next_gain():
    session = UserSession(MemoryStorage())
    profile = session.current.add_xp(0)
    assert (profile.level, profile.xp, profile.xp_to_next_level) == (15, 448, 950)


def test_coins_and_badges():
    profile = _fresh().add_coins(40).add_badge("eco-warrior")
    assert profile.coins == 40
    assert profile.add_badge("eco-warrior") is profile


def test_apply_persists_and_restores():
    storage = MemoryStorage()
    session = UserSession(storage)
    session.apply(session.current.add_coins(10))

    restored = UserSession(storage).current
    assert restored.coins == 1260
    assert restored.badges == session.current.badges


def test_impersonate_switches_user_and_clears_stored_profile():
    storage = MemoryStorage()
    session = UserSession(storage)
    session.apply(session.current.add_coins(10))

    teacher = session.impersonate("teacher1")

    assert teacher.role is UserRole.TEACHER
    assert storage.get(CURRENT_USER_KEY) is None
    assert session.impersonate("nobody") is None
    assert session.current is teacher


def test_corrupt_profile_falls_back_to_default_user():
    storage = MemoryStorage({CURRENT_USER_KEY: json.dumps({"id": "x"})})
    assert UserSession(storage).current.id == "student1"
