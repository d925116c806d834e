# どこで: `src/galaxia/interactive/scene.py`。
# 何を: 描画対象（点群スロット 1 つ + カメラ）を保持する Scene を提供する。
# なぜ: 点群の所有者を「スロット 1 つ」に限定し、二重アタッチや取り違えを即座に検出するため。

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from galaxia.interactive.camera import PerspectiveCamera
    from galaxia.interactive.gl.point_mesh import PointCloudResource


class Scene:
    """点群を高々 1 つだけ保持するシーン。

    スロットへの書き込みは RegenerationManager だけが行う。描画ループは `current` を読むだけ。
    """

    def __init__(self, camera: PerspectiveCamera | None = None) -> None:
        self.camera = camera
        self._current: PointCloudResource | None = None

    @property
    def current(self) -> PointCloudResource | None:
        return self._current

    def attach(self, resource: PointCloudResource) -> None:
        """空のスロットへ resource を置く。"""
        if self._current is not None:
            raise RuntimeError("Scene には既に点群がアタッチされています")
        self._current = resource

    def detach(self, resource: PointCloudResource) -> None:
        """スロットから resource を外す（解放はしない）。"""
        if self._current is not resource:
            raise RuntimeError("アタッチされていない点群は detach できません")
        self._current = None
