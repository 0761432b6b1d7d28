"""Shared cells — one mutable value reachable from a widget and a script handle.

A cell is created together with exactly one widget closure and exactly one
handle. Both hold ordinary references, so the value lives as long as either
owner does. Reads and writes go through a short lock; nothing ever calls out
while holding it.
"""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class SharedCell(Generic[T]):
    """A synchronized single-value cell."""

    __slots__ = ("_value", "_lock")

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def read(self) -> T:
        with self._lock:
            return self._value

    def write(self, value: T) -> None:
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"SharedCell({self.read()!r})"
