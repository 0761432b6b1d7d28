"""Tests for widget closures and the registry."""

import threading

import pytest

from scriptui import HeadlessSurface, SharedCell, WidgetKind, WidgetRegistry
from scriptui import widgets


class TestWidgets:
    def test_ids_are_unique_and_increasing(self):
        a = widgets.label("a")
        b = widgets.label("b")
        assert b.id > a.id

    def test_label_renders_text(self):
        s = HeadlessSurface()
        w = widgets.label("hi")
        assert w.kind is WidgetKind.LABEL
        assert w.render(s) is None
        assert s.calls == [("label", w.id, "hi")]

    def test_text_edit_writes_cell(self):
        s = HeadlessSurface()
        cell = SharedCell("")
        w = widgets.text_edit(cell)
        s.type_text(w.id, "hello")
        assert w.render(s) == "hello"
        assert cell.read() == "hello"

    def test_text_edit_without_input_keeps_value(self):
        s = HeadlessSurface()
        cell = SharedCell("kept")
        w = widgets.text_edit(cell)
        assert w.render(s) == "kept"
        assert cell.read() == "kept"

    def test_button_calls_callback_only_on_click(self):
        s = HeadlessSurface()
        log = []
        w = widgets.button("go", lambda: log.append("clicked"))
        assert w.render(s) is False
        assert log == []
        s.click(w.id)
        assert w.render(s) is True
        assert log == ["clicked"]
        assert w.render(s) is False
        assert log == ["clicked"]

    def test_button_callback_error_escapes_render(self):
        s = HeadlessSurface()

        def _boom():
            raise ValueError("boom")

        w = widgets.button("go", _boom)
        s.click(w.id)
        with pytest.raises(ValueError, match="boom"):
            w.render(s)

    def test_callback_can_read_cell_during_render(self):
        """No cell lock is held while a callback runs."""
        s = HeadlessSurface()
        cell = SharedCell("")
        edit = widgets.text_edit(cell)
        seen = []
        btn = widgets.button("read", lambda: seen.append(cell.read()))
        s.type_text(edit.id, "abc")
        s.click(btn.id)
        edit.render(s)
        btn.render(s)
        assert seen == ["abc"]

    def test_separator(self):
        s = HeadlessSurface()
        w = widgets.separator()
        w.render(s)
        assert s.calls == [("separator", w.id)]

    def test_checkbox_toggles_cell(self):
        s = HeadlessSurface()
        cell = SharedCell(False)
        w = widgets.checkbox("ok", cell)
        assert w.render(s) is False
        s.toggle(w.id)
        assert w.render(s) is True
        assert cell.read() is True
        s.toggle(w.id)
        assert w.render(s) is False
        assert cell.read() is False

    def test_repr(self):
        w = widgets.separator()
        assert repr(w) == f"Widget({w.id}, separator)"


class TestRegistry:
    def test_append_preserves_order(self):
        r = WidgetRegistry()
        ws = [widgets.label(str(i)) for i in range(5)]
        for w in ws:
            r.append(w)
        assert len(r) == 5
        assert list(r) == ws
        assert r[0] is ws[0]

    def test_clear_returns_dropped(self):
        r = WidgetRegistry()
        r.append(widgets.separator())
        r.append(widgets.separator())
        dropped = r.clear()
        assert len(dropped) == 2
        assert len(r) == 0

    def test_snapshot_is_independent(self):
        r = WidgetRegistry()
        r.append(widgets.separator())
        snap = r.snapshot()
        r.append(widgets.separator())
        assert len(snap) == 1
        assert len(r) == 2

    def test_restore(self):
        r = WidgetRegistry()
        keep = [widgets.label("a"), widgets.label("b")]
        r.append(widgets.separator())
        r.restore(keep)
        assert list(r) == keep

    def test_concurrent_appends_all_land(self):
        r = WidgetRegistry()

        def _fill():
            for _ in range(200):
                r.append(widgets.separator())

        threads = [threading.Thread(target=_fill) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(r) == 800
        assert r[799].kind is WidgetKind.SEPARATOR
