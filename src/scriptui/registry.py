"""Widget registry — the ordered list of widgets a script has declared.

Append-only for the life of one script session; render order is
declaration order. Binding functions append during script execution, the
render pass reads a snapshot, and a reload clears it.
"""

from __future__ import annotations

import threading
from typing import Iterator

from scriptui.widgets import Widget


class WidgetRegistry:
    """Insertion-ordered, append-only sequence of widgets."""

    __slots__ = ("_widgets", "_lock")

    def __init__(self) -> None:
        self._widgets: list[Widget] = []
        self._lock = threading.Lock()

    def append(self, widget: Widget) -> None:
        with self._lock:
            self._widgets.append(widget)

    def snapshot(self) -> list[Widget]:
        """Copy of the current widgets, safe to iterate while appends happen."""
        with self._lock:
            return list(self._widgets)

    def clear(self) -> list[Widget]:
        """Drop every widget. Returns what was dropped."""
        with self._lock:
            dropped, self._widgets = self._widgets, []
        return dropped

    def restore(self, widgets: list[Widget]) -> None:
        """Replace the contents wholesale (used to roll back a failed load)."""
        with self._lock:
            self._widgets = list(widgets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._widgets)

    def __iter__(self) -> Iterator[Widget]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Widget:
        with self._lock:
            return self._widgets[index]

    def __repr__(self) -> str:
        return f"WidgetRegistry({self.snapshot()!r})"
