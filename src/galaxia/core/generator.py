# どこで: `src/galaxia/core/generator.py`。
# 何を: パラメータから渦巻銀河の点群（位置 + 描画属性）を生成する純粋関数を提供する。
# なぜ: 生成を GPU/ウィンドウから切り離し、乱数を注入してヘッドレスに検証できるようにするため。

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from galaxia.core.errors import GenerationError


@dataclass(frozen=True, slots=True)
class PointMaterial:
    """点群の描画属性。

    size 以外は固定（加算合成 / 半透明 / 深度書き込み無し / 距離減衰あり）。
    """

    size: float
    size_attenuation: bool = True
    transparent: bool = True
    depth_write: bool = False
    blending: str = "additive"
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)


@dataclass(frozen=True, slots=True)
class PointCloudData:
    """生成結果。positions は shape (count, 3) の float32（読み取り専用）。"""

    positions: np.ndarray
    material: PointMaterial

    @property
    def count(self) -> int:
        return int(self.positions.shape[0])

    def branch_indices(self, branches: int) -> np.ndarray:
        """各点が属する腕の番号（index mod branches）を返す。"""

        return np.arange(self.count, dtype=np.int64) % int(branches)


def _generate_positions(
    *,
    count: int,
    radius: float,
    branches: int,
    spin: float,
    randomness: float,
    randomness_power: float,
    rng: np.random.Generator,
) -> np.ndarray:
    # 半径は一様乱数の線形スケール（面積一様ではない）。中心ほど密になる見た目はこれに依存する。
    r = rng.random(count) * radius
    spin_angle = r * spin
    # 腕の割り当ては乱数ではなく index の剰余。
    branch_angle = (np.arange(count) % branches) / branches * (2.0 * math.pi)

    # 軸ごとに独立な符号（各 0.5）と、power で中心線へ寄せたオフセット。
    magnitude = rng.random((count, 3)) ** randomness_power
    sign = np.where(rng.random((count, 3)) < 0.5, 1.0, -1.0)
    offsets = sign * magnitude * randomness * r[:, None]

    angle = branch_angle + spin_angle
    positions = np.empty((count, 3), dtype=np.float32)
    positions[:, 0] = np.cos(angle) * r + offsets[:, 0]
    positions[:, 1] = offsets[:, 1]
    positions[:, 2] = np.sin(angle) * r + offsets[:, 2]
    return positions


def generate_galaxy(params: Any, *, rng: np.random.Generator | None = None) -> PointCloudData:
    """パラメータから点群を生成して返す。

    Parameters
    ----------
    params : GalaxyParameters
        生成パラメータ。`count/size/radius/branches/spin/randomness/randomness_power`
        を属性として持つオブジェクトなら受け付ける（レンジ検証は呼び出し側の責務）。
    rng : np.random.Generator | None
        乱数源。同じ seed の Generator を渡せば同一の点群になる。
        None の場合は新規に `np.random.default_rng()` を作る。

    Returns
    -------
    PointCloudData
        `count` 点の位置と描画属性。`count == 0` の場合は空（shape (0, 3)）。

    Raises
    ------
    GenerationError
        生成に失敗した場合（メモリ不足など）。
    """

    if rng is None:
        rng = np.random.default_rng()

    try:
        count = int(params.count)
        if count < 0:
            raise ValueError(f"count は 0 以上である必要があります: got={count}")
        branches = int(params.branches)
        if branches < 1:
            raise ValueError(f"branches は 1 以上である必要があります: got={branches}")
        positions = _generate_positions(
            count=count,
            radius=float(params.radius),
            branches=branches,
            spin=float(params.spin),
            randomness=float(params.randomness),
            randomness_power=float(params.randomness_power),
            rng=rng,
        )
        material = PointMaterial(size=float(params.size))
    except Exception as exc:
        raise GenerationError(f"点群の生成に失敗しました: {exc}") from exc

    positions.setflags(write=False)
    return PointCloudData(positions=positions, material=material)


__all__ = ["PointCloudData", "PointMaterial", "generate_galaxy"]
