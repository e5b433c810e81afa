"""Random string generation."""

from __future__ import annotations

import random
import string

LETTERS = string.ascii_lowercase + string.ascii_uppercase


def string_runes(length: int) -> str:
    """Return a random string of ASCII letters of the given length."""
    if length < 0:
        raise ValueError(f"length must not be negative: {length}")
    return "".join(random.choices(LETTERS, k=length))


class Randomizer:
    """Generates random strings."""

    def string_runes(self, length: int) -> str:
        return string_runes(length)