# どこで: `src/galaxia/interactive/parameter_gui/gui.py`。
# 何を: 銀河パラメータを pyimgui の slider で編集する GUI（window 生成/初期化/1フレーム描画/破棄）を提供する。
# なぜ: 依存の重い imgui のライフサイクル管理を 1 箇所に閉じ込め、ControlBinding を純粋に保つため。

from __future__ import annotations

import time
from typing import Any

from .control_binding import ControlBinding
from .widgets import render_control

DEFAULT_WINDOW_WIDTH = 360
DEFAULT_WINDOW_HEIGHT = 320

_ERROR_TEXT_COLOR = (1.0, 0.4, 0.4)


def create_parameter_gui_window(
    *,
    width: int = DEFAULT_WINDOW_WIDTH,
    height: int = DEFAULT_WINDOW_HEIGHT,
    caption: str = "Galaxy Parameters",
    vsync: bool = False,
) -> Any:
    """Parameter GUI 用の pyglet ウィンドウを生成する。"""

    import pyglet

    gl_cfg = pyglet.gl.Config(double_buffer=True)  # type: ignore[abstract]
    return pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        caption=str(caption),
        resizable=False,
        vsync=bool(vsync),
        config=gl_cfg,
    )


def _create_imgui_pyglet_renderer(gui_window: Any) -> Any:
    """pyglet 用の ImGui renderer を作成する。"""

    # imgui の pyglet backend は環境によって import 経路が揺れるため、明示的にここで解決する。
    try:
        from imgui.integrations import pyglet as imgui_pyglet  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

    factory = getattr(imgui_pyglet, "create_renderer", None)
    if callable(factory):
        return factory(gui_window)
    return imgui_pyglet.PygletRenderer(gui_window)


class ParameterGUI:
    """pyimgui で ControlBinding のパラメータを編集するための最小 GUI。

    slider を動かしている間は `ControlBinding.edit()` で値だけ更新し、
    操作が確定したフレームで `ControlBinding.commit()` を 1 回呼ぶ。
    """

    def __init__(
        self,
        gui_window: Any,
        *,
        binding: ControlBinding,
        title: str = "Parameters",
    ) -> None:
        """GUI の初期化（ImGui コンテキスト / renderer 作成）。"""

        import imgui  # type: ignore[import-untyped]

        self._window = gui_window
        self._binding = binding
        self._title = str(title)

        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._imgui = imgui
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_dark()

        # ImGui の draw_data を実際に OpenGL へ流す renderer。内部に GL リソースを保持する。
        self._renderer = _create_imgui_pyglet_renderer(gui_window)

        self._prev_time = time.monotonic()
        self._closed = False

    def _sync_io(self, dt: float) -> None:
        """ImGui IO をウィンドウ状態（サイズ/Retina スケール/Δt）に同期する。"""

        io = self._imgui.get_io()
        io.delta_time = max(float(dt), 1e-4)
        fb_w, fb_h = self._window.get_framebuffer_size()
        win_w, win_h = self._window.width, self._window.height
        io.display_size = (float(win_w), float(win_h))
        io.display_fb_scale = (
            float(fb_w) / float(max(1, win_w)),
            float(fb_h) / float(max(1, win_h)),
        )

    def _render_controls(self) -> bool:
        """全コントロールを描画し、確定があれば commit する。commit したら True。"""

        imgui = self._imgui
        binding = self._binding
        committed_any = False
        for control in binding.controls():
            changed, committed, value = render_control(imgui, control, binding.value(control.name))
            if changed:
                binding.edit(control.name, value)
            committed_any = committed_any or committed

        # 1 フレームに確定が複数来ても再生成は 1 回に抑える。
        if committed_any:
            binding.commit()
        return committed_any

    def draw_frame(self) -> bool:
        """1 フレーム分の GUI を描画する。再生成を行ったフレームなら True。

        `flip()` は呼ばない。呼び出し側（RenderLoop 経由の `Window.draw`）が担当する。
        """

        if self._closed:
            return False

        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui = self._imgui
        imgui.set_current_context(self._context)

        # 注: imgui.integrations.pyglet の process_inputs() は内部で pyglet.clock.tick() を呼ぶ。
        # `pyglet.app.run()` 駆動時にこれを呼ぶと clock が二重に進みやすいので、ここでは呼ばない。
        imgui.new_frame()
        self._sync_io(dt)

        # GUI は 1 ウィンドウで全面表示する（位置/サイズ固定）。
        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE
            | imgui.WINDOW_NO_COLLAPSE
            | imgui.WINDOW_NO_TITLE_BAR,
        )
        try:
            committed = self._render_controls()
            last_error = self._binding.last_error
            if last_error is not None:
                imgui.separator()
                imgui.text_colored(f"regenerate failed: {last_error}", *_ERROR_TEXT_COLOR)
        finally:
            imgui.end()

        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(0.12, 0.12, 0.12, 1.0)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())
        return committed

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する。"""

        # 二重 close を許容する（呼び出し側の finally から安全に呼べるようにする）。
        if self._closed:
            return
        self._closed = True

        # imgui renderer の GL 資源は GUI ウィンドウのコンテキストに属する。
        self._window.switch_to()
        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()
