# どこで: `src/galaxia/interactive/runtime/draw_window_system.py`。
# 何を: 銀河の点群を描画ウィンドウへ描くサブシステム（window/renderer/scene/camera/再生成）を提供する。
# なぜ: `src/galaxia/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import numpy as np

from galaxia.interactive.camera import OrbitControls, PerspectiveCamera
from galaxia.interactive.draw_window import create_draw_window
from galaxia.interactive.gl.draw_renderer import DrawRenderer
from galaxia.interactive.parameter_gui.control_binding import ControlBinding
from galaxia.interactive.render_settings import RenderSettings
from galaxia.interactive.runtime.regeneration import RegenerationManager
from galaxia.interactive.scene import Scene


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        *,
        settings: RenderSettings,
        rng: np.random.Generator | None = None,
    ) -> None:
        """描画用の window/renderer と、点群を差し替える RegenerationManager を初期化する。"""

        self._settings = settings

        # 描画用の pyglet window を作成し、その window の OpenGL コンテキストに紐づく renderer を作る。
        self.window = create_draw_window(settings)
        self._renderer = DrawRenderer(self.window)

        self.camera = PerspectiveCamera(
            fov=settings.fov,
            near=settings.near,
            far=settings.far,
            position=settings.camera_position,
        )
        self.camera.set_viewport_size(self.window.width, self.window.height)
        self.controls = OrbitControls(self.camera)
        self.controls.attach(self.window)

        self.scene = Scene(self.camera)
        self.regeneration = RegenerationManager(
            self.scene,
            build_resource=self._renderer.resource_factory(),
            rng=rng,
        )
        self._binding: ControlBinding | None = None
        self.window.push_handlers(on_resize=self._on_resize)

    def bind_controls(self, binding: ControlBinding) -> None:
        """操作パネルの確定を、このウィンドウのフレーム冒頭で反映するよう登録する。"""
        self._binding = binding

    def _on_resize(self, width: int, height: int) -> None:
        # viewport は毎フレーム framebuffer サイズから設定するので、ここではカメラ側だけ追従させる。
        self.camera.set_viewport_size(width, height)
        self.controls.set_viewport_size(width, height)

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def _pixel_ratio(self, fb_height: int) -> float:
        ratio = float(fb_height) / float(max(1, int(self.window.height)))
        return min(ratio, float(self._settings.max_pixel_ratio))

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        # GUI ウィンドウの描画で framebuffer binding が揺れるため、毎フレーム screen を bind し直す。
        self._renderer.ctx.screen.use()

        # --- 0) 保留中の確定を反映 ---
        #
        # 点群の VBO/VAO はこのウィンドウのコンテキストで作る必要がある。
        # GUI の描画中ではなく、ここで再生成する。
        if self._binding is not None:
            self._binding.apply_pending()

        # --- 1) ビューポート更新 ---
        fb_w, fb_h = self._framebuffer_size()
        self._renderer.viewport(fb_w, fb_h)

        # --- 2) 背景クリア ---
        self._renderer.clear(self._settings.background_color)

        # --- 3) カメラ操作の反映（減衰付き） ---
        self.controls.update()

        # --- 4) 今アタッチされている点群を描く ---
        #
        # 再生成は同じスレッドで同期的に終わるため、ここで差し替え途中の Scene は見えない。
        self._renderer.render_scene(
            self.scene,
            pixel_ratio=self._pixel_ratio(fb_h),
            logical_height=int(self.window.height),
        )

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        try:
            # ループ終了直後は GUI 側のコンテキストが current のことがあるため切り替える。
            self.window.switch_to()
            # 点群の GPU 資源を先に解放してから renderer（コンテキスト）を破棄する。
            self.regeneration.close()
            self._renderer.release()
        finally:
            self.window.close()
