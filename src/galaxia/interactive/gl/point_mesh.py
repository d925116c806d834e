"""
どこで: `src/galaxia/interactive/gl/point_mesh.py`。
何を: 1 つの点群（VBO/VAO + 描画属性）の確保・描画・解放を担当する PointCloudResource を提供。
なぜ: GPU メモリの解放タイミングを GC 任せにせず、差し替え時に明示的かつ決定的に行うため。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np

from galaxia.core.errors import ResourceBuildError
from galaxia.core.generator import PointCloudData, PointMaterial


class PointCloudResource:
    """
    点群の GPU 常駐データを所有する。

    VBO (Vertex Buffer Object): 頂点位置（float32 x 3）を格納する GPU メモリ。
    VAO (Vertex Array Object): VBO とシェーダ入力 `in_position` の対応付け。
    """

    # moderngl は空バッファを確保できないため、count == 0 でも最小限を予約する。
    MIN_RESERVE_BYTES = 12

    def __init__(self, ctx: Any, program: Any, data: PointCloudData) -> None:
        """
        ctx: moderngl コンテキスト
        program: `in_position` を持つシェーダプログラム
        data: 生成済みの点群（この時点で全点そろっている必要がある）
        """
        self.ctx = ctx
        self.program = program
        self.material: PointMaterial = data.material
        self.count: int = data.count
        self.vbo: Any = None
        self.vao: Any = None
        self._released = False

        try:
            positions = np.ascontiguousarray(data.positions, dtype=np.float32)
            if positions.nbytes > 0:
                self.vbo = ctx.buffer(positions.tobytes())
            else:
                self.vbo = ctx.buffer(reserve=self.MIN_RESERVE_BYTES)
            self.vao = ctx.vertex_array(program, [(self.vbo, "3f", "in_position")])
        except Exception as exc:
            # 途中まで確保したものは呼び出し側に渡らないので、ここで解放する。
            self.release()
            raise ResourceBuildError(f"点群の GPU 資源を構築できません: {exc}") from exc

    @property
    def released(self) -> bool:
        return self._released

    def render(self) -> None:
        """POINTS で描画する（解放済み / 空なら何もしない）。"""
        if self._released or self.count == 0:
            return
        self.vao.render(mode=self.ctx.POINTS, vertices=self.count)

    def release(self) -> None:
        """GPU のメモリを解放する。二重呼び出しは無視する。"""
        if self._released:
            return
        self._released = True
        if self.vao is not None:
            self.vao.release()
            self.vao = None
        if self.vbo is not None:
            self.vbo.release()
            self.vbo = None


def build_point_cloud_resource(
    ctx: Any, program: Any
) -> Callable[[PointCloudData], PointCloudResource]:
    """ctx/program を束縛した「PointCloudData → PointCloudResource」の factory を返す。"""

    def build(data: PointCloudData) -> PointCloudResource:
        return PointCloudResource(ctx, program, data)

    return build


__all__ = ["PointCloudResource", "build_point_cloud_resource"]
