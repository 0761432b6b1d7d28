"""Script session — one engine, one registry, and the per-frame contract.

A frame runs in a fixed order:
    1. surface.begin_frame()
    2. the script's optional entry point (``ui_frame`` by default)
    3. the render pass over a snapshot of the registry, in declaration order
    4. surface.end_frame()

Script mutation always happens before render, and render finishes before
the next script tick. Failures are caught at two sites only, both logged:
load() keeps the previous widgets when a script fails to load, and the
render pass records a failing widget and moves on to the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from scriptui.bindings import install
from scriptui.engine import ScriptEngine
from scriptui.errors import BridgeError, ScriptLoadError
from scriptui.registry import WidgetRegistry
from scriptui.surface import Surface
from scriptui.widgets import Widget

logger = logging.getLogger("scriptui.session")

DEFAULT_ENTRY_POINT = "ui_frame"


@dataclass
class FrameReport:
    """What happened during one frame."""

    rendered: int = 0
    results: dict[int, Any] = field(default_factory=dict)
    errors: list[BridgeError] = field(default_factory=list)
    entry_point_ran: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Re-raise the first error of the frame, for hosts that want to propagate."""
        if self.errors:
            raise self.errors[0]


def render_pass(widgets: Iterable[Widget], surface: Surface, report: FrameReport | None = None) -> FrameReport:
    """Render every widget in order. A failing widget does not stop the rest."""
    report = report if report is not None else FrameReport()
    for widget in widgets:
        try:
            report.results[widget.id] = widget.render(surface)
        except BridgeError as exc:
            logger.exception("Widget %r failed during render", widget)
            report.errors.append(exc)
        report.rendered += 1
    return report


class ScriptSession:
    """Owns the scripting engine and the widget registry for one script.

    Configured with keyword arguments:
        entry_point: name of the optional per-frame script function.
        clear_on_load: drop previously declared widgets before each load.
            When False, widgets accumulate across loads.
    """

    def __init__(self, *, entry_point: str = DEFAULT_ENTRY_POINT, clear_on_load: bool = True) -> None:
        self.entry_point = entry_point
        self.clear_on_load = clear_on_load
        self._source: str | None = None
        self._source_name = "<script>"
        self.registry = WidgetRegistry()
        self.engine = ScriptEngine()
        install(self.engine, self.registry)

    @property
    def last_error(self) -> BaseException | None:
        return self.engine.last_error

    def load(self, source: str, *, name: str = "<script>") -> bool:
        """Execute ``source``, replacing the declared widgets.

        Returns False if the script failed; the previous widgets and the
        previously loaded source stay in place.
        """
        if self.clear_on_load:
            previous = self.registry.clear()
        else:
            previous = self.registry.snapshot()

        try:
            self.engine.execute(source, name)
        except BridgeError:
            self.registry.restore(previous)
            logger.exception("Failed to load script %s", name)
            return False
        except BaseException:
            self.registry.restore(previous)
            raise

        self._source = source
        self._source_name = name
        logger.info("Loaded %s: %d->%d widgets", name, len(previous), len(self.registry))
        return True

    def load_file(self, path: str | Path) -> bool:
        path = Path(path)
        return self.load(path.read_text(encoding="utf-8"), name=str(path))

    def reload(self) -> bool:
        """Re-execute the last loaded source."""
        if self._source is None:
            raise ScriptLoadError(self._source_name, "no script has been loaded")
        return self.load(self._source, name=self._source_name)

    def reset(self) -> None:
        """Start over with a fresh engine and an empty registry."""
        dropped = self.registry.clear()
        self.engine = ScriptEngine()
        self.registry = WidgetRegistry()
        install(self.engine, self.registry)
        logger.info("Reset session, dropped %d widgets", len(dropped))

    def frame(self, surface: Surface) -> FrameReport:
        """Run one frame against ``surface``."""
        report = FrameReport()
        surface.begin_frame()
        try:
            try:
                report.entry_point_ran = self.engine.call_entry_point(self.entry_point)
            except BridgeError as exc:
                logger.exception("Entry point %s failed", self.entry_point)
                report.errors.append(exc)
            render_pass(self.registry.snapshot(), surface, report)
        finally:
            surface.end_frame()
        logger.debug("Frame rendered %d widgets, %d errors", report.rendered, len(report.errors))
        return report

    def __repr__(self) -> str:
        return f"ScriptSession({self._source_name}, {len(self.registry)} widgets)"
