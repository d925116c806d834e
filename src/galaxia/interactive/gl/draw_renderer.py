# どこで: `src/galaxia/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・描画ステート切り替えを描画ループから分離し、責務を明確にするため。

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import moderngl

from galaxia.core.generator import PointCloudData, PointMaterial
from galaxia.interactive.gl.point_mesh import PointCloudResource, build_point_cloud_resource
from galaxia.interactive.gl.shader import Shader
from galaxia.interactive.scene import Scene

if TYPE_CHECKING:
    from pyglet.window import Window


class DrawRenderer:
    """Scene の点群を 1 枚描くシンプルなレンダラー。"""

    def __init__(self, window: Window) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.program = Shader.create_shader(self.ctx)

    def resource_factory(self) -> Callable[[PointCloudData], PointCloudResource]:
        """このコンテキスト上に PointCloudResource を作る factory を返す。"""
        return build_point_cloud_resource(self.ctx, self.program)

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0, depth=1.0)

    def _apply_material(self, material: PointMaterial) -> None:
        flags = moderngl.PROGRAM_POINT_SIZE
        if material.transparent:
            flags |= moderngl.BLEND
        # 深度テストを切ると深度書き込みも行われない。
        if material.depth_write:
            flags |= moderngl.DEPTH_TEST
        self.ctx.enable_only(flags)

        if material.blending == "additive":
            self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE
        else:
            self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA

    def render_scene(self, scene: Scene, *, pixel_ratio: float, logical_height: int) -> None:
        """Scene に今アタッチされている点群を描画する（無ければ何もしない）。"""
        resource = scene.current
        camera = scene.camera
        if resource is None or camera is None:
            return

        material = resource.material
        self._apply_material(material)

        program = self.program
        program["view"].write(camera.view_matrix().tobytes())
        program["projection"].write(camera.projection_matrix().tobytes())
        program["point_size"].value = float(material.size) * float(pixel_ratio)
        program["size_scale"].value = float(logical_height) * 0.5
        program["size_attenuation"].value = bool(material.size_attenuation)
        program["color"].value = tuple(float(c) for c in material.color)
        program["opacity"].value = 1.0

        resource.render()

    def release(self) -> None:
        """GPU リソースを解放する。点群 resource は RegenerationManager 側で解放済みの前提。"""
        self.program.release()
        self.ctx.release()
