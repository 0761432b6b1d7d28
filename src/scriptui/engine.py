"""Scripting engine — an isolated Python namespace that runs script source.

The engine owns the script's globals. Host functions are registered by name
and re-asserted before every execution so a script cannot permanently
shadow them. Script functions handed back to the host (button callbacks)
are wrapped in ScriptCallback, which pins them to the engine's thread.

State machine:
    UNLOADED --execute--> LOADED
    LOADED --execute (error)--> LOADED, last_error set

There is no crashed state: a failing script leaves the engine usable.
"""

from __future__ import annotations

import builtins
import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from scriptui.errors import (
    BindingError,
    CallbackError,
    ScriptLoadError,
    ScriptRuntimeError,
    ThreadAffinityError,
)


class EngineState(str, Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"


class ScriptEngine:
    """One script interpreter instance. Single-threaded, not re-entrant."""

    def __init__(self) -> None:
        self._globals: dict[str, Any] = {
            "__name__": "__script__",
            "__builtins__": builtins,
        }
        self._host_functions: dict[str, Callable] = {}
        self._thread_id = threading.get_ident()
        self._busy = False
        self.state = EngineState.UNLOADED
        self.last_error: BaseException | None = None

    @property
    def globals(self) -> Mapping[str, Any]:
        return MappingProxyType(self._globals)

    @property
    def host_functions(self) -> Mapping[str, Callable]:
        return MappingProxyType(self._host_functions)

    def register(self, name: str, fn: Callable) -> None:
        """Expose ``fn`` to scripts as the global ``name``."""
        if not isinstance(name, str) or not name.isidentifier():
            raise BindingError(f"invalid host function name: {name!r}")
        if not callable(fn):
            raise BindingError(f"host function {name!r} is not callable")
        if name in self._host_functions:
            raise BindingError(f"host function {name!r} already registered")
        self._host_functions[name] = fn
        self._globals[name] = fn

    def execute(self, source: str, name: str = "<script>") -> None:
        """Compile and run ``source`` in the script namespace.

        Raises ScriptLoadError on syntax errors or anything raised at top level.
        """
        self._enter()
        try:
            self.state = EngineState.LOADED
            self._globals.update(self._host_functions)
            try:
                code = compile(source, name, "exec")
                exec(code, self._globals)
            # exit() from a script is a script error, not a host shutdown.
            except (Exception, SystemExit) as exc:
                self.last_error = exc
                raise ScriptLoadError(name, f"{type(exc).__name__}: {exc}") from exc
            self.last_error = None
        finally:
            self._leave()

    def call_entry_point(self, name: str) -> bool:
        """Invoke the optional script function ``name`` with no arguments.

        Returns False when the script does not define it.
        """
        fn = self._globals.get(name)
        if fn is None:
            return False
        if not callable(fn):
            raise ScriptRuntimeError(f"entry point {name!r} is not callable")
        self._enter()
        try:
            fn()
        except (Exception, SystemExit) as exc:
            self.last_error = exc
            raise ScriptRuntimeError(f"{name}: {type(exc).__name__}: {exc}") from exc
        finally:
            self._leave()
        return True

    def callback(self, fn: Callable[[], Any], *, name: str | None = None) -> ScriptCallback:
        return ScriptCallback(self, fn, name=name)

    def check_thread(self) -> None:
        if threading.get_ident() != self._thread_id:
            raise ThreadAffinityError(
                "script code must run on the thread that created the engine"
            )

    def _enter(self) -> None:
        self.check_thread()
        if self._busy:
            raise ScriptRuntimeError("script engine is not re-entrant")
        self._busy = True

    def _leave(self) -> None:
        self._busy = False

    def __repr__(self) -> str:
        return f"ScriptEngine({self.state.value}, {len(self._host_functions)} host functions)"


class ScriptCallback:
    """Opaque reference to a script function, invoked on the engine's thread."""

    __slots__ = ("_engine", "_fn", "name", "widget_id")

    def __init__(self, engine: ScriptEngine, fn: Callable[[], Any], *, name: str | None = None) -> None:
        self._engine = engine
        self._fn = fn
        self.name = name or getattr(fn, "__name__", repr(fn))
        self.widget_id: int | None = None

    def __call__(self) -> Any:
        engine = self._engine
        engine._enter()
        try:
            return self._fn()
        except (Exception, SystemExit) as exc:
            engine.last_error = exc
            raise CallbackError(
                f"callback {self.name!r} raised {type(exc).__name__}: {exc}",
                widget_id=self.widget_id,
            ) from exc
        finally:
            engine._leave()

    def __repr__(self) -> str:
        return f"ScriptCallback({self.name})"
