from __future__ import annotations

# どこで: `src/galaxia/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（透視投影 / view 行列生成）を提供する。
# なぜ: camera と renderer で座標系の定義を一箇所に集約するため。

import math

import numpy as np


def build_perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """透視投影行列（ModernGL 用の転置済み）を返す。

    fov_deg は垂直画角（度）。
    """
    f = 1.0 / math.tan(math.radians(float(fov_deg)) / 2.0)
    aspect = max(float(aspect), 1e-6)
    near = float(near)
    far = float(far)
    proj = np.array(
        [
            [f / aspect, 0, 0, 0],
            [0, f, 0, 0],
            [0, 0, (far + near) / (near - far), 2 * far * near / (near - far)],
            [0, 0, -1, 0],
        ],
        dtype="f4",
    ).T
    return proj


def build_look_at(
    eye: tuple[float, float, float],
    target: tuple[float, float, float],
    up: tuple[float, float, float] = (0.0, 1.0, 0.0),
) -> np.ndarray:
    """eye から target を見る view 行列（ModernGL 用の転置済み）を返す。"""
    eye_v = np.asarray(eye, dtype=np.float64)
    forward = np.asarray(target, dtype=np.float64) - eye_v
    forward /= max(float(np.linalg.norm(forward)), 1e-12)
    side = np.cross(forward, np.asarray(up, dtype=np.float64))
    side /= max(float(np.linalg.norm(side)), 1e-12)
    true_up = np.cross(side, forward)

    view = np.identity(4, dtype=np.float64)
    view[0, :3] = side
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[0, 3] = -float(np.dot(side, eye_v))
    view[1, 3] = -float(np.dot(true_up, eye_v))
    view[2, 3] = float(np.dot(forward, eye_v))
    return view.astype("f4").T
