"""Collect missing values from lookups so they can be reported at once."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple


class MissingKeysError(Exception):
    """Raised when one or more looked-up keys had no value."""

    def __init__(self, message: str, keys: Sequence[str]):
        self.message = message
        self.keys = tuple(keys)
        super().__init__(f"{message}: {', '.join(self.keys)}")


class ErrGetter:
    """Wraps a lookup function and records the keys that had no value."""

    def __init__(self, get: Callable[[str], Optional[str]]):
        self._get = get
        self._missing: list[str] = []

    @property
    def missing_keys(self) -> Tuple[str, ...]:
        return tuple(self._missing)

    def get(self, key: str) -> str:
        """Look up ``key``, remembering it if the value is empty."""
        value = self._get(key) or ""
        if not value:
            self._missing.append(key)
        return value

    def check(self, message: str) -> None:
        """Raise MissingKeysError listing every missing key, if there are any."""
        if self._missing:
            raise MissingKeysError(message, self._missing)


def wrap_func(get: Callable[[str], Optional[str]]) -> ErrGetter:
    """Return an ErrGetter around ``get``."""
    return ErrGetter(get)