"""Identifier generation for quizzes, questions and options."""

from __future__ import annotations

import random
import string
import time

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


def generate_id(prefix: str) -> str:
    """Return ``{prefix}_{epoch millis}_{random base-36 suffix}``.

    Collisions are only improbable, not impossible; ids are unique enough for
    a single local library but not across installations.
    """
    millis = time.time_ns() // 1_000_000
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=_SUFFIX_LENGTH))
    return f"{prefix}_{millis}_{suffix}"
