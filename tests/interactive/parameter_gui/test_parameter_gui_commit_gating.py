"""ParameterGUI の slider 操作 → edit/commit の対応をテスト（imgui はダミー）。"""

from __future__ import annotations

import sys
import types
from typing import Any

import pytest

from galaxia.core.parameters import GalaxyParameters
from galaxia.interactive.parameter_gui.control_binding import ControlBinding, ControlSpec
from galaxia.interactive.parameter_gui.gui import ParameterGUI
from galaxia.interactive.parameter_gui.widgets import render_control, slider_format


class FakeImgui(types.ModuleType):
    """slider の返り値をフレームごとに台本どおり返すダミー imgui。"""

    SLIDER_FLAGS_ALWAYS_CLAMP = 1 << 4

    def __init__(self) -> None:
        super().__init__("imgui")
        # name -> (changed, value, deactivated_after_edit)
        self.script: dict[str, tuple[bool, Any, bool]] = {}
        self.slider_calls: list[tuple[str, str, Any, Any, Any, str]] = []
        self._id_stack: list[str] = []
        self._last_item: str | None = None

    # --- context ---
    def create_context(self) -> object:
        return object()

    def set_current_context(self, _ctx: object) -> None:
        return None

    def style_colors_dark(self) -> None:
        return None

    def destroy_context(self, _ctx: object) -> None:
        return None

    # --- layout ---
    def push_id(self, name: str) -> None:
        self._id_stack.append(name)

    def pop_id(self) -> None:
        self._id_stack.pop()

    def text(self, _label: str) -> None:
        return None

    def same_line(self, position: float = 0.0, spacing: float = -1.0) -> None:
        return None

    def push_item_width(self, _w: float) -> None:
        return None

    def pop_item_width(self) -> None:
        return None

    # --- widgets ---
    def _slider(self, kind: str, value: Any, lo: Any, hi: Any, fmt: str) -> tuple[bool, Any]:
        name = self._id_stack[-1]
        self._last_item = name
        self.slider_calls.append((kind, name, value, lo, hi, fmt))
        changed, out, _ = self.script.get(name, (False, value, False))
        return changed, out

    def slider_float(self, _label: str, value: float, lo: float, hi: float, format: str = "%.3f", flags: int = 0):
        return self._slider("float", value, lo, hi, format)

    def slider_int(self, _label: str, value: int, lo: int, hi: int, format: str = "%d", flags: int = 0):
        return self._slider("int", value, lo, hi, format)

    def is_item_deactivated_after_edit(self) -> bool:
        assert self._last_item is not None
        return self.script.get(self._last_item, (False, None, False))[2]


class DummyGuiWindow:
    width = 360
    height = 320

    def __init__(self) -> None:
        self.events: list[str] = []

    def switch_to(self) -> None:
        self.events.append("switch_to")

    def close(self) -> None:
        self.events.append("close")


class DummyRenderer:
    def __init__(self, window: Any) -> None:
        self.window = window

    def shutdown(self) -> None:
        self.window.events.append("shutdown")


@pytest.fixture
def fake_imgui(monkeypatch: pytest.MonkeyPatch) -> FakeImgui:
    imgui = FakeImgui()
    integrations = types.ModuleType("imgui.integrations")
    pyglet_backend = types.ModuleType("imgui.integrations.pyglet")
    pyglet_backend.create_renderer = DummyRenderer  # type: ignore[attr-defined]
    integrations.pyglet = pyglet_backend  # type: ignore[attr-defined]
    imgui.integrations = integrations  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "imgui", imgui)
    monkeypatch.setitem(sys.modules, "imgui.integrations", integrations)
    monkeypatch.setitem(sys.modules, "imgui.integrations.pyglet", pyglet_backend)
    return imgui


def _gui(regenerate_calls: list[dict[str, Any]]) -> tuple[ParameterGUI, ControlBinding]:
    params = GalaxyParameters()
    binding = ControlBinding(params, lambda p: regenerate_calls.append(p.as_dict()))
    return ParameterGUI(DummyGuiWindow(), binding=binding), binding


def test_drag_frames_only_edit_and_release_frame_commits_once(fake_imgui: FakeImgui) -> None:
    calls: list[dict[str, Any]] = []
    gui, binding = _gui(calls)
    params = binding.params

    # ドラッグ中の 3 フレーム（値は動くが確定しない）。
    for value in (1.2, 1.9, 2.4):
        fake_imgui.script = {"spin": (True, value, False)}
        assert gui._render_controls() is False
        assert binding.apply_pending() is None
    assert calls == []
    assert params.spin == pytest.approx(2.4)

    # マウスを離したフレーム。
    fake_imgui.script = {"spin": (False, 2.4, True)}
    assert gui._render_controls() is True
    # GUI のフレーム内では再生成せず、描画側のフレーム冒頭まで保留する。
    assert calls == []
    assert binding.apply_pending() is True
    assert len(calls) == 1
    assert calls[0]["spin"] == pytest.approx(2.4)


def test_multiple_commits_in_one_frame_regenerate_once(fake_imgui: FakeImgui) -> None:
    calls: list[dict[str, Any]] = []
    gui, binding = _gui(calls)

    fake_imgui.script = {
        "count": (True, 2000, True),
        "branches": (True, 5, True),
    }
    gui._render_controls()
    binding.apply_pending()

    assert binding.commit_count == 1

    assert len(calls) == 1
    assert calls[0]["count"] == 2000
    assert calls[0]["branches"] == 5


def test_slider_values_are_normalized_on_edit(fake_imgui: FakeImgui) -> None:
    calls: list[dict[str, Any]] = []
    gui, binding = _gui(calls)
    params = binding.params

    fake_imgui.script = {"count": (True, 1234, False), "radius": (True, 3.14159, False)}
    gui._render_controls()

    assert params.count == 1200
    assert params.radius == pytest.approx(3.14)


def test_every_control_is_drawn_with_its_bounds(fake_imgui: FakeImgui) -> None:
    calls: list[dict[str, Any]] = []
    gui, _ = _gui(calls)
    gui._render_controls()

    drawn = {name: (kind, lo, hi, fmt) for kind, name, _v, lo, hi, fmt in fake_imgui.slider_calls}
    assert drawn["count"] == ("int", 100, 1_000_000, "%d")
    assert drawn["branches"] == ("int", 2, 20, "%d")
    assert drawn["radius"] == ("float", 0.01, 20.0, "%.2f")
    assert drawn["randomness_power"] == ("float", 1.0, 10.0, "%.3f")
    assert len(drawn) == 7


def test_unknown_kind_is_rejected(fake_imgui: FakeImgui) -> None:
    control = ControlSpec(name="x", label="x", kind="vec3", ui_min=0, ui_max=1, step=0.1)
    with pytest.raises(ValueError):
        render_control(fake_imgui, control, (0.0, 0.0, 0.0))


def test_slider_format_follows_step() -> None:
    assert slider_format(ControlSpec("a", "a", "float", 0.0, 1.0, 0.001)) == "%.3f"
    assert slider_format(ControlSpec("b", "b", "float", 0.0, 20.0, 0.01)) == "%.2f"
    assert slider_format(ControlSpec("c", "c", "int", 100, 1000, 100)) == "%d"


def test_close_shuts_down_renderer_in_gui_context_once(fake_imgui: FakeImgui) -> None:
    calls: list[dict[str, Any]] = []
    gui, _ = _gui(calls)
    window = gui._window

    gui.close()
    gui.close()

    assert window.events == ["switch_to", "shutdown", "close"]
