# どこで: `src/galaxia/interactive/parameter_gui/control_binding.py`。
# 何を: GalaxyParameters の各フィールドを操作パネルの slider へ対応付け、確定（commit）した分だけ再生成を呼ぶ。
# なぜ: ドラッグ中の中間値で O(count) の再生成を走らせず、再生成頻度を操作者のペースに抑えるため。

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from galaxia.core.errors import GalaxiaError
from galaxia.core.parameters import PARAM_SPECS, GalaxyParameters

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ControlSpec:
    """操作パネルへ登録する 1 コントロール分の情報（min/max/step/label）。"""

    name: str
    label: str
    kind: str
    ui_min: float
    ui_max: float
    step: float


class ControlBinding:
    """ParameterSet と操作パネルの橋渡し。

    - `edit()` はドラッグ中の中間値。値を書き込むだけで再生成しない。
    - `commit()` は操作の確定。再生成を保留として記録するだけ。
    - `apply_pending()` は描画ウィンドウのフレーム冒頭で呼ばれ、保留があれば `regenerate(params)` を 1 回呼ぶ。
    """

    def __init__(
        self,
        params: GalaxyParameters,
        regenerate: Callable[[GalaxyParameters], Any],
    ) -> None:
        self.params = params
        self._regenerate = regenerate
        self.last_error: str | None = None
        self.commit_count = 0
        self._pending = False

    def controls(self) -> list[ControlSpec]:
        """表示順（フィールド定義順）のコントロール一覧を返す。"""
        return [
            ControlSpec(
                name=spec.name,
                label=spec.label,
                kind=spec.kind,
                ui_min=spec.ui_min,
                ui_max=spec.ui_max,
                step=spec.step,
            )
            for spec in PARAM_SPECS.values()
        ]

    def value(self, name: str) -> int | float:
        return self.params.get(name)

    def edit(self, name: str, value: Any) -> int | float:
        """中間値を書き込み、正規化後の値を返す。"""
        return self.params.set(name, value)

    def commit(self) -> None:
        """操作の確定を記録する。再生成は次の `apply_pending()` でまとめて 1 回行う。

        commit は GUI ウィンドウの描画中に呼ばれる。ここで GL 資源を作ると GUI 側の
        コンテキストに VAO ができてしまうため、実際の再生成は描画ウィンドウ側に任せる。
        """
        self.commit_count += 1
        self._pending = True

    @property
    def pending(self) -> bool:
        return self._pending

    def apply_pending(self) -> bool | None:
        """保留中の確定があれば現在の params で再生成する。

        Returns
        -------
        bool | None
            保留が無ければ None。再生成に成功したら True、失敗したら False。

        再生成の失敗（GalaxiaError）はここで止めてログに残し、`last_error` に保持する。
        直前の点群は RegenerationManager 側で表示されたまま残る。
        """
        if not self._pending:
            return None
        self._pending = False
        try:
            self._regenerate(self.params)
        except GalaxiaError as exc:
            _logger.exception("Failed to regenerate galaxy: %s", self.params.as_dict())
            self.last_error = str(exc)
            return False
        self.last_error = None
        return True


__all__ = ["ControlBinding", "ControlSpec"]
