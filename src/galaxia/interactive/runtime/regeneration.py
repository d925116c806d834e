# どこで: `src/galaxia/interactive/runtime/regeneration.py`。
# 何を: パラメータから点群を作り直し、Scene の点群を「新規構築 → 旧解放 → 新アタッチ」で差し替える。
# なぜ: 構築失敗時に描画対象が消えないこと、旧 GPU 資源が必ず解放されることを 1 箇所で保証するため。

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import numpy as np

from galaxia.core.errors import GenerationError, ResourceBuildError
from galaxia.core.generator import PointCloudData, generate_galaxy
from galaxia.core.parameters import GalaxyParameters
from galaxia.interactive.scene import Scene

_logger = logging.getLogger(__name__)

GenerateFn = Callable[..., PointCloudData]
BuildResourceFn = Callable[[PointCloudData], Any]


class RegenerationManager:
    """Scene の点群スロットの唯一の書き手。

    `regenerate()` は同期的に完了する（描画ループと同じスレッドで呼ぶ前提）。
    そのため描画ループから差し替え途中の状態が見えることはない。
    """

    def __init__(
        self,
        scene: Scene,
        *,
        build_resource: BuildResourceFn,
        generate: GenerateFn = generate_galaxy,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._scene = scene
        self._build_resource = build_resource
        self._generate = generate
        self._rng = rng if rng is not None else np.random.default_rng()
        self.regeneration_count = 0

    @property
    def current(self) -> Any | None:
        return self._scene.current

    def regenerate(self, params: GalaxyParameters) -> Any:
        """点群を作り直して Scene へ差し替え、新しい resource を返す。

        Raises
        ------
        GenerationError
            生成に失敗した場合。旧 resource はアタッチされたまま残る。
        ResourceBuildError
            GPU 資源の構築に失敗した場合。旧 resource はアタッチされたまま残る。
        """

        t0 = time.perf_counter()

        # --- 1) 生成 ---
        try:
            data = self._generate(params, rng=self._rng)
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"点群の生成に失敗しました: {exc}") from exc

        # --- 2) 新 resource の構築（旧 resource にはまだ触らない） ---
        try:
            resource = self._build_resource(data)
        except ResourceBuildError:
            raise
        except Exception as exc:
            raise ResourceBuildError(f"点群の GPU 資源を構築できません: {exc}") from exc

        # --- 3) 旧 resource の detach + 解放 → 新 resource のアタッチ ---
        #
        # 旧 resource の解放が失敗しても、新 resource は必ずスロットへ入れる。
        previous = self._scene.current
        try:
            if previous is not None:
                self._scene.detach(previous)
                previous.release()
        finally:
            self._scene.attach(resource)
        self.regeneration_count += 1

        _logger.debug(
            "regenerated galaxy: count=%d elapsed=%.1fms",
            data.count,
            (time.perf_counter() - t0) * 1000.0,
        )
        return resource

    def close(self) -> None:
        """アタッチ中の resource を外して解放する（終了時に使う）。"""
        current = self._scene.current
        if current is None:
            return
        self._scene.detach(current)
        current.release()


__all__ = ["RegenerationManager"]
