# どこで: `src/galaxia/interactive/runtime/parameter_gui_system.py`。
# 何を: Parameter GUI を「1フレーム描画できるサブシステム」として提供する。
# なぜ: `src/galaxia/api/runner.py` の `run()` から GUI 初期化/描画/後始末を分離するため。

from __future__ import annotations

from galaxia.core.runtime_config import runtime_config
from galaxia.interactive.parameter_gui import (
    ControlBinding,
    ParameterGUI,
    create_parameter_gui_window,
)


class ParameterGUIWindowSystem:
    """Parameter GUI（別ウィンドウ）のサブシステム。"""

    def __init__(self, *, binding: ControlBinding) -> None:
        """GUI 用の window と ParameterGUI を初期化する。"""

        w, h = runtime_config().parameter_gui_window_size
        self.window = create_parameter_gui_window(width=w, height=h, vsync=False)
        self._gui = ParameterGUI(self.window, binding=binding)

    def draw_frame(self) -> None:
        """1 フレーム分の GUI を描画する（`flip()` は呼ばない）。"""

        self._gui.draw_frame()

    def close(self) -> None:
        """GUI を終了し、ウィンドウを破棄する。"""

        self._gui.close()
