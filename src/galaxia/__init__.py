# どこで: `src/galaxia/__init__.py`。
# 何を: ルート `galaxia` パッケージを定義する。
# なぜ: import 起点を `galaxia` に統一するため。

from __future__ import annotations

from galaxia.core.generator import PointCloudData, PointMaterial, generate_galaxy
from galaxia.core.parameters import GalaxyParameters

__all__ = [
    "GalaxyParameters",
    "PointCloudData",
    "PointMaterial",
    "generate_galaxy",
    "run",
]


def __getattr__(name: str):
    # run は pyglet を import するため、使うときだけ読み込む（core をヘッドレスに保つ）。
    if name == "run":
        from galaxia.api import run

        return run
    raise AttributeError(f"module 'galaxia' has no attribute {name!r}")
