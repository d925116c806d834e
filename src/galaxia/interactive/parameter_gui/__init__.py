# どこで: `src/galaxia/interactive/parameter_gui/__init__.py`。
# 何を: Parameter GUI の公開 API を集約する。
# なぜ: ControlBinding（純粋）と imgui 依存の GUI を分けつつ、利用側の import パスを安定させるため。

from __future__ import annotations

from .control_binding import ControlBinding, ControlSpec
from .gui import ParameterGUI, create_parameter_gui_window

__all__ = [
    "ControlBinding",
    "ControlSpec",
    "ParameterGUI",
    "create_parameter_gui_window",
]
