"""Widget closures — one captured render function per declared widget.

A Widget is a tagged variant: an id, a kind, and a closure from a Surface to
that widget's interaction result. The factories below build the closure for
each of the five primitives. Captured state is the static configuration,
at most one SharedCell, and for buttons the script callback.

Cell locks are released before any surface call or callback, so a callback
that reads the same cell through its handle cannot deadlock.
"""

from __future__ import annotations

import itertools
from enum import Enum
from typing import Any, Callable

from scriptui.cell import SharedCell
from scriptui.surface import Surface

# itertools.count is thread-safe (C-level GIL atomic)
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


class WidgetKind(str, Enum):
    LABEL = "label"
    TEXT_EDIT = "text_edit"
    BUTTON = "button"
    SEPARATOR = "separator"
    CHECKBOX = "checkbox"


class Widget:
    """A renderable widget. Immutable after creation."""

    __slots__ = ("id", "kind", "_render")

    def __init__(self, kind: WidgetKind, render: Callable[[Surface, int], Any]) -> None:
        self.id = new_id()
        self.kind = kind
        self._render = render

    def render(self, surface: Surface) -> Any:
        """Render against this frame's surface; return the interaction result."""
        return self._render(surface, self.id)

    def __repr__(self) -> str:
        return f"Widget({self.id}, {self.kind.value})"


def label(text: str) -> Widget:
    def _render(surface: Surface, key: int) -> None:
        surface.label(key, text)

    return Widget(WidgetKind.LABEL, _render)


def text_edit(cell: SharedCell[str]) -> Widget:
    def _render(surface: Surface, key: int) -> str:
        current = cell.read()
        edited = surface.text_edit(key, current)
        if edited != current:
            cell.write(edited)
        return edited

    return Widget(WidgetKind.TEXT_EDIT, _render)


def button(text: str, callback: Callable[[], Any]) -> Widget:
    """Button widget. ``callback`` runs synchronously on the click frame.

    Whatever the callback raises escapes render(); the render pass decides
    what to do with it.
    """

    def _render(surface: Surface, key: int) -> bool:
        clicked = bool(surface.button(key, text))
        if clicked:
            callback()
        return clicked

    return Widget(WidgetKind.BUTTON, _render)


def separator() -> Widget:
    def _render(surface: Surface, key: int) -> None:
        surface.separator(key)

    return Widget(WidgetKind.SEPARATOR, _render)


def checkbox(text: str, cell: SharedCell[bool]) -> Widget:
    def _render(surface: Surface, key: int) -> bool:
        current = cell.read()
        checked = bool(surface.checkbox(key, text, current))
        if checked != current:
            cell.write(checked)
        return checked

    return Widget(WidgetKind.CHECKBOX, _render)
