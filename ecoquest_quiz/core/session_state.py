"""Current-user session: learner profile values and demo impersonation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import json
import logging
import math

from ecoquest_quiz.constants.storage_constants import CURRENT_USER_KEY
from ecoquest_quiz.core.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_LEVEL_THRESHOLD_GROWTH = 1.2


class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class LearnerProfile:
    """Immutable progress snapshot; every change returns a new profile."""

    id: str
    name: str
    role: UserRole
    level: int = 1
    xp: int = 0
    xp_to_next_level: int = 100
    coins: int = 0
    badges: tuple[str, ...] = ()

    def add_xp(self, amount: int) -> LearnerProfile:
        """Add experience, levelling up as many times as the total allows.

        Each level-up consumes the current threshold and raises the next one
        by 20% (rounded down).
        """
        level, xp, threshold = self.level, self.xp + amount, self.xp_to_next_level
        while threshold > 0 and xp >= threshold:
            xp -= threshold
            level += 1
            threshold = math.floor(threshold * _LEVEL_THRESHOLD_GROWTH)
        return replace(self, level=level, xp=xp, xp_to_next_level=threshold)

    def add_coins(self, amount: int) -> LearnerProfile:
        return replace(self, coins=self.coins + amount)

    def add_badge(self, badge_id: str) -> LearnerProfile:
        if badge_id in self.badges:
            return self
        return replace(self, badges=(*self.badges, badge_id))

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "level": self.level,
            "xp": self.xp,
            "xpToNextLevel": self.xp_to_next_level,
            "coins": self.coins,
            "badges": list(self.badges),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> LearnerProfile:
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            role=UserRole(data["role"]),
            level=int(data["level"]),
            xp=int(data["xp"]),
            xp_to_next_level=int(data["xpToNextLevel"]),
            coins=int(data["coins"]),
            badges=tuple(str(badge) for badge in data.get("badges", [])),
        )


DEMO_USERS: tuple[LearnerProfile, ...] = (
    LearnerProfile(
        id="student1",
        name="Alex Chen",
        role=UserRole.STUDENT,
        level=12,
        xp=2450,
        xp_to_next_level=550,
        coins=1250,
        badges=("eco-warrior", "quiz-master", "tree-hugger", "water-saver"),
    ),
    LearnerProfile(
        id="teacher1",
        name="Ms. Rodriguez",
        role=UserRole.TEACHER,
        level=25,
        xp=8750,
        xp_to_next_level=1250,
        coins=3200,
        badges=("educator", "mentor", "eco-champion", "community-builder"),
    ),
    LearnerProfile(
        id="admin1",
        name="Dr. Green",
        role=UserRole.ADMIN,
        level=50,
        xp=25000,
        xp_to_next_level=5000,
        coins=10000,
        badges=("system-admin", "eco-pioneer", "platform-creator", "sustainability-guru"),
    ),
)


class UserSession:
    """Owns the signed-in profile and persists it between runs."""

    def __init__(self, storage: KeyValueStorage, default_user_id: str = "student1") -> None:
        self._storage = storage
        self._current = self._restore() or _demo_user(default_user_id) or DEMO_USERS[0]

    @property
    def current(self) -> LearnerProfile:
        return self._current

    def apply(self, profile: LearnerProfile) -> LearnerProfile:
        """Make ``profile`` current and persist it."""
        self._storage.put(CURRENT_USER_KEY, json.dumps(profile.to_dict()))
        self._current = profile
        return profile

    def impersonate(self, user_id: str) -> LearnerProfile | None:
        """Switch to a demo user, discarding the persisted profile."""
        user = _demo_user(user_id)
        if user is None:
            return None
        self._storage.delete(CURRENT_USER_KEY)
        self._current = user
        return user

    def _restore(self) -> LearnerProfile | None:
        raw = self._storage.get(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            return LearnerProfile.from_dict(json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError):
            logger.warning("Stored user profile is corrupted; using the default user")
            return None


def _demo_user(user_id: str) -> LearnerProfile | None:
    return next((user for user in DEMO_USERS if user.id == user_id), None)
