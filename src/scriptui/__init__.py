"""scriptui: script-declared widgets rendered by a host every frame."""

from importlib.metadata import version as _version

__version__ = _version("scriptui")

from scriptui.cell import SharedCell
from scriptui.handles import TextHandle, CheckHandle
from scriptui.widgets import Widget, WidgetKind
from scriptui.registry import WidgetRegistry
from scriptui.surface import Surface, HeadlessSurface
from scriptui.engine import ScriptEngine, ScriptCallback, EngineState
from scriptui.bindings import HOST_FUNCTIONS, install
from scriptui.session import DEFAULT_ENTRY_POINT, FrameReport, ScriptSession, render_pass
from scriptui.errors import (
    BridgeError,
    ScriptLoadError,
    ScriptRuntimeError,
    CallbackError,
    ScriptArgumentError,
    BindingError,
    ThreadAffinityError,
)
# textual NOT auto-imported — opt-in only

__all__ = [
    "SharedCell",
    "TextHandle",
    "CheckHandle",
    "Widget",
    "WidgetKind",
    "WidgetRegistry",
    "Surface",
    "HeadlessSurface",
    "ScriptEngine",
    "ScriptCallback",
    "EngineState",
    "HOST_FUNCTIONS",
    "install",
    "DEFAULT_ENTRY_POINT",
    "FrameReport",
    "ScriptSession",
    "render_pass",
    "BridgeError",
    "ScriptLoadError",
    "ScriptRuntimeError",
    "CallbackError",
    "ScriptArgumentError",
    "BindingError",
    "ThreadAffinityError",
]
