# どこで: `src/galaxia/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    window_size: tuple[int, int] = (800, 600)
    # 点サイズ計算に使う pixel ratio の上限（高 DPI で点が過剰に大きくならないように）。
    max_pixel_ratio: float = 2.0
    fov: float = 75.0
    near: float = 0.1
    far: float = 100.0
    camera_position: tuple[float, float, float] = (3.0, 3.0, 3.0)
