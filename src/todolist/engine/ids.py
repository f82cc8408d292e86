# src/todolist/engine/ids.py

"""
Task id generators.

A generator is any zero-argument callable returning an int. Uniqueness is
the only requirement; ordering and predictability are not.
"""

from __future__ import annotations

import secrets
from typing import Callable, Final


IdGenerator = Callable[[], int]

ID_BITS: Final[int] = 63


class RandomIdGenerator:
    """
    Random non-negative 63-bit ids.

    Remembers what it has issued and draws again on a repeat.
    """

    def __init__(self) -> None:
        self._issued: set[int] = set()

    def __call__(self) -> int:
        while True:
            n = secrets.randbits(ID_BITS)
            if n not in self._issued:
                self._issued.add(n)
                return n


class CounterIdGenerator:
    """
    Monotonic ids starting at `start`.

    `reserve` moves the counter past ids that were issued elsewhere
    (e.g. restored from a flat state).
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def __call__(self) -> int:
        n = self._next
        self._next += 1
        return n

    def reserve(self, used: int) -> None:
        if used >= self._next:
            self._next = used + 1


def make_id_generator(mode: str) -> IdGenerator:
    """Return a fresh generator for `mode` ("random" or "counter")."""
    m = (mode or "").strip().lower()
    if m == "random":
        return RandomIdGenerator()
    if m == "counter":
        return CounterIdGenerator()
    raise ValueError(f"Unknown id mode: {mode} (allowed: random, counter)")
