"""Render surfaces — the per-frame drawing context widgets render against.

The bridge does not define how anything is drawn. A surface only has to
render the five primitives and report what the user did to each one this
frame. Widgets pass their id as ``key`` so a retained-mode backend can keep
one real widget per key across frames.

HeadlessSurface is a complete surface with no display: it records what was
rendered and replays queued interactions. Tests drive frames with it, and
so can hosts that have no UI at all.
"""

from __future__ import annotations

from typing import Protocol


class Surface(Protocol):
    def begin_frame(self) -> None: ...

    def end_frame(self) -> None: ...

    def label(self, key: int, text: str) -> None: ...

    def text_edit(self, key: int, text: str) -> str:
        """Render an editable field showing ``text``; return the edited text."""
        ...

    def button(self, key: int, text: str) -> bool:
        """Render a button; return True on the frame it was clicked."""
        ...

    def separator(self, key: int) -> None: ...

    def checkbox(self, key: int, text: str, checked: bool) -> bool:
        """Render a toggle showing ``checked``; return the new state."""
        ...


class HeadlessSurface:
    """Display-less surface with scripted user input.

    Usage:
        surface = HeadlessSurface()
        surface.type_text(widget_id, "hello")
        session.frame(surface)
        # the text field bound to widget_id now holds "hello"
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.frames = 0
        self._clicks: set[int] = set()
        self._edits: dict[int, str] = {}
        self._toggles: set[int] = set()

    # --- Scripted interaction (consumed by the next render of that key) ---

    def click(self, key: int) -> None:
        self._clicks.add(key)

    def type_text(self, key: int, text: str) -> None:
        self._edits[key] = text

    def toggle(self, key: int) -> None:
        # Two toggles queued before a frame cancel out, as they would on screen.
        self._toggles ^= {key}

    # --- Surface protocol ---

    def begin_frame(self) -> None:
        self.calls = []

    def end_frame(self) -> None:
        self.frames += 1

    def label(self, key: int, text: str) -> None:
        self.calls.append(("label", key, text))

    def text_edit(self, key: int, text: str) -> str:
        text = self._edits.pop(key, text)
        self.calls.append(("text_edit", key, text))
        return text

    def button(self, key: int, text: str) -> bool:
        self.calls.append(("button", key, text))
        if key in self._clicks:
            self._clicks.discard(key)
            return True
        return False

    def separator(self, key: int) -> None:
        self.calls.append(("separator", key))

    def checkbox(self, key: int, text: str, checked: bool) -> bool:
        if key in self._toggles:
            self._toggles.discard(key)
            checked = not checked
        self.calls.append(("checkbox", key, text, checked))
        return checked

    @property
    def rendered_keys(self) -> list[int]:
        """Keys rendered during the last frame, in render order."""
        return [call[1] for call in self.calls]
