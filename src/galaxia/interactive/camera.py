# どこで: `src/galaxia/interactive/camera.py`。
# 何を: 透視カメラと、減衰付きのオービット操作（ドラッグで回転 / スクロールでズーム）を提供する。
# なぜ: カメラ姿勢の所有と毎フレームの `update()` を描画ループから切り離すため。

from __future__ import annotations

import math
from typing import Any

import numpy as np

from galaxia.interactive.gl import utils as gl_utils

_EPS = 1e-6


class PerspectiveCamera:
    """垂直画角/アスペクト/near/far と位置・注視点を持つカメラ。"""

    def __init__(
        self,
        *,
        fov: float = 75.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 100.0,
        position: tuple[float, float, float] = (3.0, 3.0, 3.0),
        target: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> None:
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position = np.asarray(position, dtype=np.float64)
        self.target = np.asarray(target, dtype=np.float64)

    def set_viewport_size(self, width: int, height: int) -> None:
        """ウィンドウのリサイズに追従してアスペクト比を更新する。"""
        self.aspect = float(width) / float(max(1, int(height)))

    def view_matrix(self) -> np.ndarray:
        return gl_utils.build_look_at(tuple(self.position), tuple(self.target))

    def projection_matrix(self) -> np.ndarray:
        return gl_utils.build_perspective(self.fov, self.aspect, self.near, self.far)


class OrbitControls:
    """target 周りの球面座標でカメラを動かす操作系。

    入力イベントは「目標までの差分」を溜めるだけで、カメラへの反映は `update()` で行う。
    damping 有効時は毎フレーム差分の `damping_factor` 分だけ進め、残りを減衰させる。
    """

    def __init__(
        self,
        camera: PerspectiveCamera,
        *,
        enable_damping: bool = True,
        damping_factor: float = 0.05,
        rotate_speed: float = 1.0,
        zoom_speed: float = 1.0,
        min_distance: float = 0.1,
        max_distance: float = 90.0,
    ) -> None:
        self.camera = camera
        self.enable_damping = bool(enable_damping)
        self.damping_factor = float(damping_factor)
        self.rotate_speed = float(rotate_speed)
        self.zoom_speed = float(zoom_speed)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self._viewport_height = 1

        # 未反映の差分（theta/phi はラジアン、zoom は log スケール）。
        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._delta_log_radius = 0.0

    # ---------- 入力 ----------
    def attach(self, window: Any) -> None:
        """pyglet window のマウスイベントを購読する。"""
        self._viewport_height = max(1, int(window.height))
        window.push_handlers(
            on_mouse_drag=self.on_mouse_drag,
            on_mouse_scroll=self.on_mouse_scroll,
        )

    def set_viewport_size(self, width: int, height: int) -> None:
        self._viewport_height = max(1, int(height))

    def rotate(self, dx: float, dy: float) -> None:
        """画面上の移動量（px）を回転の差分として溜める。"""
        h = float(self._viewport_height)
        self._delta_theta -= 2.0 * math.pi * float(dx) / h * self.rotate_speed
        # pyglet の y は上向き。上へドラッグすると上から覗き込む向きに回す。
        self._delta_phi += 2.0 * math.pi * float(dy) / h * self.rotate_speed

    def zoom(self, steps: float) -> None:
        """スクロール量を距離の差分として溜める（正で近づく）。"""
        self._delta_log_radius += float(steps) * math.log(0.95) * self.zoom_speed

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int) -> None:
        self.rotate(dx, dy)

    def on_mouse_scroll(self, x: int, y: int, scroll_x: float, scroll_y: float) -> None:
        self.zoom(scroll_y)

    # ---------- 毎フレーム ----------
    def update(self) -> None:
        """溜まった差分をカメラ位置へ反映する（1 フレームに 1 回呼ぶ）。"""
        camera = self.camera
        offset = camera.position - camera.target
        radius = float(np.linalg.norm(offset))
        if radius < _EPS:
            return

        theta = math.atan2(offset[0], offset[2])
        phi = math.acos(max(-1.0, min(1.0, offset[1] / radius)))

        k = self.damping_factor if self.enable_damping else 1.0
        theta += self._delta_theta * k
        phi += self._delta_phi * k
        radius *= math.exp(self._delta_log_radius * k)

        phi = max(_EPS, min(math.pi - _EPS, phi))
        radius = max(self.min_distance, min(self.max_distance, radius))

        sin_phi = math.sin(phi)
        camera.position = camera.target + radius * np.array(
            [sin_phi * math.sin(theta), math.cos(phi), sin_phi * math.cos(theta)],
            dtype=np.float64,
        )

        if self.enable_damping:
            self._delta_theta *= 1.0 - self.damping_factor
            self._delta_phi *= 1.0 - self.damping_factor
            self._delta_log_radius *= 1.0 - self.damping_factor
        else:
            self._delta_theta = 0.0
            self._delta_phi = 0.0
            self._delta_log_radius = 0.0


__all__ = ["OrbitControls", "PerspectiveCamera"]
