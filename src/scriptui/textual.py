"""Textual integration for scriptui. Opt-in — requires textual.

Textual keeps a retained widget tree, while scripts declare widgets and
expect an immediate-mode surface. TextualSurface bridges the two: each
widget key maps to one mounted Textual widget, user events are buffered
until the next frame consumes them, and widgets that were not rendered in
a frame are pruned when it ends (e.g. after a script reload).

ScriptView is a ready-made container that drives a ScriptSession on an
interval timer and routes its children's events into the surface. Its
load_script action (ctrl+r) re-executes the script on demand.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Checkbox, Input, Label, Rule

from scriptui.errors import ScriptLoadError
from scriptui.session import FrameReport, ScriptSession

logger = logging.getLogger("scriptui.textual")

_ID_PREFIX = "scriptui-"


def dom_id(key: int) -> str:
    return f"{_ID_PREFIX}{key}"


def key_for(widget_id: str | None) -> int | None:
    """Inverse of dom_id(); None for widgets scriptui did not create."""
    if not widget_id or not widget_id.startswith(_ID_PREFIX):
        return None
    suffix = widget_id[len(_ID_PREFIX):]
    return int(suffix) if suffix.isdigit() else None


class TextualSurface:
    """Immediate-mode Surface over a Textual container.

    ``container`` only needs mount() and remove_children(), so any Textual
    widget that can hold children works.
    """

    def __init__(self, container: Any) -> None:
        self._container = container
        self._mounted: dict[int, Widget] = {}
        self._seen: set[int] = set()
        self._pressed: set[int] = set()
        self._values: dict[int, Any] = {}

    @property
    def mounted(self) -> dict[int, Widget]:
        return dict(self._mounted)

    # --- Event feed (called from Textual message handlers) ---

    def press(self, key: int) -> None:
        self._pressed.add(key)

    def edit(self, key: int, value: str) -> None:
        self._values[key] = value

    def set_checked(self, key: int, value: bool) -> None:
        self._values[key] = value

    # --- Surface protocol ---

    def begin_frame(self) -> None:
        self._seen.clear()

    def end_frame(self) -> None:
        stale = [key for key in self._mounted if key not in self._seen]
        if not stale:
            return
        removed = [self._mounted.pop(key) for key in stale]
        for key in stale:
            self._pressed.discard(key)
            self._values.pop(key, None)
        self._container.remove_children(removed)
        logger.debug("Pruned %d widgets", len(removed))

    def label(self, key: int, text: str) -> None:
        self._ensure(key, lambda: Label(text, id=dom_id(key)))

    def text_edit(self, key: int, text: str) -> str:
        self._ensure(key, lambda: Input(value=text, id=dom_id(key)))
        return self._values.pop(key, text)

    def button(self, key: int, text: str) -> bool:
        self._ensure(key, lambda: Button(text, id=dom_id(key)))
        if key in self._pressed:
            self._pressed.discard(key)
            return True
        return False

    def separator(self, key: int) -> None:
        self._ensure(key, lambda: Rule(id=dom_id(key)))

    def checkbox(self, key: int, text: str, checked: bool) -> bool:
        self._ensure(key, lambda: Checkbox(text, checked, id=dom_id(key)))
        return self._values.pop(key, checked)

    def _ensure(self, key: int, factory: Callable[[], Widget]) -> Widget:
        self._seen.add(key)
        widget = self._mounted.get(key)
        if widget is None:
            widget = factory()
            self._mounted[key] = widget
            self._container.mount(widget)
        return widget


class ScriptView(VerticalScroll):
    """Renders a ScriptSession's widgets, one frame per timer tick.

    With ``script_path`` set, load_script reads that file; otherwise it
    re-executes whatever the session last loaded.
    """

    BINDINGS = [("ctrl+r", "load_script", "Load script")]

    def __init__(
        self,
        session: ScriptSession,
        *,
        fps: float = 30,
        script_path: str | Path | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.fps = fps
        self.script_path = Path(script_path) if script_path is not None else None
        self.script_surface = TextualSurface(self)
        self.last_report: FrameReport | None = None

    def on_mount(self) -> None:
        self.set_interval(1 / self.fps, self.render_frame)

    def action_load_script(self) -> bool:
        """Execute the script again; widgets are replaced on the next frame."""
        try:
            if self.script_path is not None:
                ok = self.session.load_file(self.script_path)
            else:
                ok = self.session.reload()
        except (ScriptLoadError, OSError) as exc:
            logger.warning("Cannot load script: %s", exc)
            self.notify(f"Cannot load script: {exc}", severity="error")
            return False
        if not ok:
            self.notify(f"Script failed: {self.session.last_error}", severity="error")
        return ok

    def render_frame(self) -> FrameReport:
        report = self.session.frame(self.script_surface)
        for error in report.errors:
            self.notify(str(error), severity="error")
        self.last_report = report
        return report

    def on_button_pressed(self, event: Button.Pressed) -> None:
        key = key_for(event.button.id)
        if key is not None:
            event.stop()
            self.script_surface.press(key)

    def on_input_changed(self, event: Input.Changed) -> None:
        key = key_for(event.input.id)
        if key is not None:
            event.stop()
            self.script_surface.edit(key, event.value)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        key = key_for(event.checkbox.id)
        if key is not None:
            event.stop()
            self.script_surface.set_checked(key, event.value)
