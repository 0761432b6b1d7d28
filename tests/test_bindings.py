"""Tests for the host-function table and install()."""

import pytest

from scriptui import (
    HOST_FUNCTIONS,
    BindingError,
    CheckHandle,
    ScriptArgumentError,
    ScriptEngine,
    ScriptLoadError,
    TextHandle,
    WidgetKind,
    WidgetRegistry,
    install,
)


@pytest.fixture
def bound():
    engine = ScriptEngine()
    registry = WidgetRegistry()
    install(engine, registry)
    return engine, registry


class TestInstall:
    def test_registers_fixed_surface(self, bound):
        engine, _ = bound
        assert set(engine.host_functions) == {
            "ui_label",
            "ui_textedit",
            "ui_button",
            "ui_separator",
            "ui_checkbox",
        }
        assert set(HOST_FUNCTIONS) == set(engine.host_functions)

    def test_install_twice_fails(self, bound):
        engine, registry = bound
        with pytest.raises(BindingError):
            install(engine, registry)


class TestBindingFunctions:
    def test_declaration_order_is_render_order(self, bound):
        engine, registry = bound
        engine.execute(
            "ui_label('a')\n"
            "ui_textedit()\n"
            "ui_button('b', lambda: None)\n"
            "ui_separator()\n"
            "ui_checkbox('c')\n"
            "ui_label('d')\n"
        )
        assert [w.kind for w in registry] == [
            WidgetKind.LABEL,
            WidgetKind.TEXT_EDIT,
            WidgetKind.BUTTON,
            WidgetKind.SEPARATOR,
            WidgetKind.CHECKBOX,
            WidgetKind.LABEL,
        ]

    def test_n_calls_n_widgets(self, bound):
        engine, registry = bound
        engine.execute("for i in range(12):\n    ui_label(str(i))")
        assert len(registry) == 12

    def test_same_label_twice_gives_two_widgets(self, bound):
        engine, registry = bound
        engine.execute("ui_label('x')\nui_label('x')")
        assert len(registry) == 2
        assert registry[0].id != registry[1].id

    def test_return_values(self, bound):
        engine, _ = bound
        engine.execute(
            "a = ui_label('x')\n"
            "t = ui_textedit()\n"
            "b = ui_button('go', print)\n"
            "s = ui_separator()\n"
            "c = ui_checkbox('ok')\n"
        )
        g = engine.globals
        assert g["a"] is None
        assert g["b"] is None
        assert g["s"] is None
        assert isinstance(g["t"], TextHandle)
        assert isinstance(g["c"], CheckHandle)
        assert g["t"].get_text() == ""
        assert g["c"].is_checked() is False


class TestBoundaryValidation:
    @pytest.mark.parametrize(
        "call",
        [
            "ui_label(42)",
            "ui_button(None, print)",
            "ui_button('go', 'not callable')",
            "ui_checkbox(['x'])",
        ],
    )
    def test_bad_arguments_append_nothing(self, bound, call):
        engine, registry = bound
        with pytest.raises(ScriptLoadError) as info:
            engine.execute(call)
        assert isinstance(info.value.__cause__, ScriptArgumentError)
        assert len(registry) == 0

    def test_argument_error_is_type_error(self, bound):
        engine, _ = bound
        engine.execute(
            "try:\n"
            "    ui_label(1)\n"
            "except TypeError as exc:\n"
            "    caught = str(exc)\n"
        )
        assert "must be str" in engine.globals["caught"]

    def test_missing_argument(self, bound):
        engine, registry = bound
        with pytest.raises(ScriptLoadError):
            engine.execute("ui_button('go')")
        assert len(registry) == 0
