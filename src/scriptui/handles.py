"""Script-visible handles over shared cells.

Handles are thin read-only views. Reading one returns whatever the owning
widget wrote during the last render; it never renders anything itself.
"""

from __future__ import annotations

from scriptui.cell import SharedCell


class TextHandle:
    """Returned by ui_textedit()."""

    __slots__ = ("_cell",)

    def __init__(self, cell: SharedCell[str]) -> None:
        self._cell = cell

    def get_text(self) -> str:
        return self._cell.read()

    def __repr__(self) -> str:
        return f"TextHandle({self._cell.read()!r})"


class CheckHandle:
    """Returned by ui_checkbox()."""

    __slots__ = ("_cell",)

    def __init__(self, cell: SharedCell[bool]) -> None:
        self._cell = cell

    def is_checked(self) -> bool:
        return self._cell.read()

    def __repr__(self) -> str:
        return f"CheckHandle({self._cell.read()!r})"
