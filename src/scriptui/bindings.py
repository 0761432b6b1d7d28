"""Script binding layer — the fixed table of host functions scripts can call.

install(engine, registry) registers every entry in HOST_FUNCTIONS on a fresh
engine, each one closing over the same registry. Arguments are checked at
the boundary before anything is built, so a bad call leaves the registry
untouched; a good call appends exactly one widget and returns at most one
handle.

Usage (from script):
    ui_label("Name")
    name = ui_textedit()
    ok = ui_checkbox("Subscribe")
    ui_separator()
    ui_button("Submit", lambda: print(name.get_text(), ok.is_checked()))
"""

from __future__ import annotations

from typing import Any, Callable

from scriptui import widgets
from scriptui.cell import SharedCell
from scriptui.engine import ScriptEngine
from scriptui.errors import ScriptArgumentError
from scriptui.handles import CheckHandle, TextHandle
from scriptui.registry import WidgetRegistry


def _expect_str(fn_name: str, param: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ScriptArgumentError(
            f"{fn_name}() argument {param!r} must be str, not {type(value).__name__}"
        )
    return value


def _ui_label(engine: ScriptEngine, registry: WidgetRegistry) -> Callable[[str], None]:
    def ui_label(text):
        registry.append(widgets.label(_expect_str("ui_label", "text", text)))

    return ui_label


def _ui_textedit(engine: ScriptEngine, registry: WidgetRegistry) -> Callable[[], TextHandle]:
    def ui_textedit():
        cell: SharedCell[str] = SharedCell("")
        registry.append(widgets.text_edit(cell))
        return TextHandle(cell)

    return ui_textedit


def _ui_button(engine: ScriptEngine, registry: WidgetRegistry) -> Callable[[str, Callable], None]:
    def ui_button(label, callback):
        label = _expect_str("ui_button", "label", label)
        if not callable(callback):
            raise ScriptArgumentError(
                f"ui_button() argument 'callback' must be callable, not {type(callback).__name__}"
            )
        script_callback = engine.callback(callback)
        widget = widgets.button(label, script_callback)
        script_callback.widget_id = widget.id
        registry.append(widget)

    return ui_button


def _ui_separator(engine: ScriptEngine, registry: WidgetRegistry) -> Callable[[], None]:
    def ui_separator():
        registry.append(widgets.separator())

    return ui_separator


def _ui_checkbox(engine: ScriptEngine, registry: WidgetRegistry) -> Callable[[str], CheckHandle]:
    def ui_checkbox(label):
        label = _expect_str("ui_checkbox", "label", label)
        cell: SharedCell[bool] = SharedCell(False)
        registry.append(widgets.checkbox(label, cell))
        return CheckHandle(cell)

    return ui_checkbox


# name -> builder(engine, registry) -> host function
HOST_FUNCTIONS: dict[str, Callable[[ScriptEngine, WidgetRegistry], Callable]] = {
    "ui_label": _ui_label,
    "ui_textedit": _ui_textedit,
    "ui_button": _ui_button,
    "ui_separator": _ui_separator,
    "ui_checkbox": _ui_checkbox,
}


def install(engine: ScriptEngine, registry: WidgetRegistry) -> None:
    """Register every host function on ``engine``. Call once per engine.

    BindingError from the engine propagates; treat it as a startup failure.
    """
    for name, build in HOST_FUNCTIONS.items():
        engine.register(name, build(engine, registry))
