"""Error taxonomy for the script-to-UI bridge.

Every error the bridge raises derives from BridgeError, so hosts can catch
the whole family at a frame boundary. Script failures are chained to the
original exception via ``raise ... from exc``.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for all scriptui errors."""


class ScriptLoadError(BridgeError):
    """Script source failed to compile or raised during top-level execution."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


class ScriptRuntimeError(BridgeError):
    """A script function raised while being invoked by the host."""


class CallbackError(ScriptRuntimeError):
    """A button callback raised during a render pass."""

    def __init__(self, message: str, *, widget_id: int | None = None) -> None:
        super().__init__(message)
        self.widget_id = widget_id


class ScriptArgumentError(BridgeError, TypeError):
    """A host function was called from script with bad arguments."""


class BindingError(BridgeError):
    """A host function could not be registered on the engine."""


class ThreadAffinityError(BridgeError, RuntimeError):
    """A script callback was invoked off the engine's owning thread."""
