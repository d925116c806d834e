# どこで: `src/galaxia/core/parameters.py`。
# 何を: 銀河生成パラメータ（ParameterSet）と、その UI/検証用メタ情報（ParamSpec）を提供する。
# なぜ: 「常にレンジ内の値だけを保持する」不変条件を 1 箇所で保証し、GUI と生成器で共有するため。

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


def step_decimals(step: float) -> int:
    """step の小数桁数を返す（0.001 -> 3, 100 -> 0）。"""

    text = f"{float(step):.10f}".rstrip("0")
    if "." not in text:
        return 0
    return len(text.split(".", 1)[1])


@dataclass(frozen=True, slots=True)
class ParamSpec:
    """1 パラメータ分のレンジ/刻み/ラベル。

    ParamSpec は GUI の slider 登録（min/max/step/label）と、
    書き込み時の正規化（クランプ + step 丸め）の両方に使う。
    """

    name: str
    kind: str  # "int" | "float"
    ui_min: float
    ui_max: float
    step: float
    label: str
    default: float

    def normalize(self, value: Any) -> int | float:
        """値を kind に変換し、レンジへクランプして step に丸めた値を返す。

        Raises
        ------
        TypeError
            数値として解釈できない場合（bool も拒否する）。
        ValueError
            NaN の場合。
        """

        if isinstance(value, bool) or isinstance(value, (str, bytes)):
            raise TypeError(f"{self.name} は数値である必要があります: got={value!r}")
        try:
            v = float(value)
        except (TypeError, ValueError) as exc:
            raise TypeError(f"{self.name} は数値である必要があります: got={value!r}") from exc
        if math.isnan(v):
            raise ValueError(f"{self.name} に NaN は設定できません")

        lo = float(self.ui_min)
        hi = float(self.ui_max)
        # inf はクランプでレンジ端へ寄せる。
        v = min(max(v, lo), hi)

        # step は ui_min 起点で数える（count: 100, 200, ... / branches: 2, 3, ...）。
        n_steps = round((v - lo) / float(self.step))
        v = min(max(lo + n_steps * float(self.step), lo), hi)

        if self.kind == "int":
            return int(round(v))
        return round(v, step_decimals(self.step))


# 表示順 = 定義順。
PARAM_SPECS: dict[str, ParamSpec] = {
    spec.name: spec
    for spec in (
        ParamSpec("count", "int", 100, 1_000_000, 100, "count", 100_000),
        ParamSpec("size", "float", 0.001, 0.1, 0.001, "size", 0.01),
        ParamSpec("radius", "float", 0.01, 20.0, 0.01, "radius", 5.0),
        ParamSpec("branches", "int", 2, 20, 1, "branches", 3),
        ParamSpec("spin", "float", -5.0, 5.0, 0.001, "spin", 1.0),
        ParamSpec("randomness", "float", 0.0, 2.0, 0.001, "randomness", 0.2),
        ParamSpec(
            "randomness_power", "float", 1.0, 10.0, 0.001, "randomnessPower", 3.0
        ),
    )
}


@dataclass(slots=True)
class GalaxyParameters:
    """銀河生成パラメータの可変バッグ。

    既知フィールドへの代入は常に `ParamSpec.normalize` を通るため、
    どの時点で読んでも全フィールドがレンジ内にある。
    """

    count: int = int(PARAM_SPECS["count"].default)
    size: float = PARAM_SPECS["size"].default
    radius: float = PARAM_SPECS["radius"].default
    branches: int = int(PARAM_SPECS["branches"].default)
    spin: float = PARAM_SPECS["spin"].default
    randomness: float = PARAM_SPECS["randomness"].default
    randomness_power: float = PARAM_SPECS["randomness_power"].default

    def __setattr__(self, name: str, value: Any) -> None:
        spec = PARAM_SPECS.get(name)
        if spec is not None:
            value = spec.normalize(value)
        object.__setattr__(self, name, value)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "GalaxyParameters":
        """dict から生成する。未指定のフィールドは既定値のまま。"""

        params = cls()
        for name, value in values.items():
            params.set(name, value)
        return params

    def set(self, name: str, value: Any) -> int | float:
        """フィールドへ書き込み、実際に保持された（正規化後の）値を返す。"""

        if name not in PARAM_SPECS:
            raise KeyError(f"未知のパラメータです: {name!r}")
        setattr(self, name, value)
        return getattr(self, name)

    def get(self, name: str) -> int | float:
        if name not in PARAM_SPECS:
            raise KeyError(f"未知のパラメータです: {name!r}")
        return getattr(self, name)

    def as_dict(self) -> dict[str, int | float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def copy(self) -> "GalaxyParameters":
        return GalaxyParameters(**self.as_dict())


__all__ = ["GalaxyParameters", "PARAM_SPECS", "ParamSpec", "step_decimals"]
