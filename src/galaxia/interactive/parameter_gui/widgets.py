# どこで: `src/galaxia/interactive/parameter_gui/widgets.py`。
# 何を: ControlSpec.kind を pyimgui の slider へ対応付けて描画する。
# なぜ: kind ごとの UI 実装を閉じ込め、GUI のフレーム管理から分離するため。

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from galaxia.core.parameters import step_decimals

from .control_binding import ControlSpec

WidgetFn = Callable[[Any, ControlSpec, Any], tuple[bool, Any]]

# ImGui の slider_int は min/max が int32 の “半分レンジ” 以内であることを要求する。
_IMGUI_INT_LIMIT = 1_073_741_823


def slider_format(control: ControlSpec) -> str:
    """step の桁数に合わせた表示フォーマットを返す（0.001 -> "%.3f"）。"""

    if control.kind == "int":
        return "%d"
    return f"%.{step_decimals(control.step)}f"


def widget_float_slider(imgui: Any, control: ControlSpec, value: Any) -> tuple[bool, float]:
    """kind=float のスライダーを描画し、(changed, value) を返す。"""

    changed, out = imgui.slider_float(
        "##value",
        float(value),
        float(control.ui_min),
        float(control.ui_max),
        format=slider_format(control),
        flags=imgui.SLIDER_FLAGS_ALWAYS_CLAMP,
    )
    return changed, float(out)


def widget_int_slider(imgui: Any, control: ControlSpec, value: Any) -> tuple[bool, int]:
    """kind=int のスライダーを描画し、(changed, value) を返す。"""

    lo = max(-_IMGUI_INT_LIMIT, int(control.ui_min))
    hi = min(_IMGUI_INT_LIMIT, int(control.ui_max))
    changed, out = imgui.slider_int(
        "##value",
        int(value),
        lo,
        hi,
        format=slider_format(control),
        flags=imgui.SLIDER_FLAGS_ALWAYS_CLAMP,
    )
    return changed, int(out)


_KIND_TO_WIDGET: dict[str, WidgetFn] = {
    "float": widget_float_slider,
    "int": widget_int_slider,
}


def render_control(imgui: Any, control: ControlSpec, value: Any) -> tuple[bool, bool, Any]:
    """1 コントロールを描画し、(changed, committed, value) を返す。

    Returns
    -------
    changed : bool
        このフレームで値が動いた場合 True（ドラッグ中の中間値を含む）。
    committed : bool
        操作が確定した（編集後にフォーカスが外れた / ドラッグを離した）場合 True。
    value : Any
        slider 上の値（正規化前）。

    Raises
    ------
    ValueError
        未知 kind の場合。
    """

    fn = _KIND_TO_WIDGET.get(control.kind)
    if fn is None:
        raise ValueError(f"unknown kind: {control.kind}")

    imgui.push_id(control.name)
    try:
        imgui.text(control.label)
        imgui.same_line(position=140)
        imgui.push_item_width(-1)
        changed, out = fn(imgui, control, value)
        imgui.pop_item_width()
        committed = bool(imgui.is_item_deactivated_after_edit())
    finally:
        imgui.pop_id()
    return bool(changed), committed, out


__all__ = ["render_control", "slider_format"]
