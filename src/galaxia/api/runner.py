"""
どこで: `src/galaxia/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL で渦巻銀河の点群をリアルタイム描画し、Parameter GUI で再生成できるランナーを提供する。
なぜ: `main.py` を実行して実際に銀河をプレビューできる経路を用意するため。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

import numpy as np
import pyglet

from galaxia.core.parameters import GalaxyParameters
from galaxia.core.runtime_config import runtime_config, set_config_path
from galaxia.interactive.parameter_gui import ControlBinding
from galaxia.interactive.render_settings import RenderSettings
from galaxia.interactive.runtime.draw_window_system import DrawWindowSystem
from galaxia.interactive.runtime.window_loop import RenderLoop, WindowTask

_logger = logging.getLogger(__name__)


def run(
    *,
    params: GalaxyParameters | Mapping[str, Any] | None = None,
    seed: int | None = None,
    config_path: str | Path | None = None,
    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    parameter_gui: bool = True,
    fps: float = 60.0,
) -> None:
    """pyglet ウィンドウを生成し、銀河の点群をリアルタイム描画する。

    Parameters
    ----------
    params : GalaxyParameters | Mapping[str, Any] | None
        初期パラメータ。dict の場合は未指定フィールドが既定値になる。レンジ外の値はクランプされる。
    seed : int | None
        点群生成に使う乱数の seed。None の場合は毎回異なる点群になる。
        seed を指定しても、再生成ごとに同じ Generator から続けて引くため 2 回目以降の点群は変わる。
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    background_color : tuple[float, float, float]
        背景色 RGB。既定は黒。
    parameter_gui : bool
        True の場合、別ウィンドウで Parameter GUI を起動する。
    fps : float
        目標フレームレート。`<=0` の場合は可能な限り速く回す。

    Returns
    -------
    None
        どちらかのウィンドウを閉じると制御を返す。
    """

    set_config_path(config_path)
    cfg = runtime_config()

    # True にすると Parameter GUI のクリックやドラッグが抜ける事がある。
    pyglet.options["vsync"] = False

    if params is None:
        galaxy_params = GalaxyParameters()
    elif isinstance(params, GalaxyParameters):
        galaxy_params = params
    else:
        galaxy_params = GalaxyParameters.from_mapping(params)

    settings = RenderSettings(
        background_color=background_color,
        window_size=cfg.draw_window_size,
        max_pixel_ratio=cfg.max_pixel_ratio,
    )

    # --- サブシステムの組み立て ---
    draw_window = DrawWindowSystem(settings=settings, rng=np.random.default_rng(seed))
    draw_window.window.set_location(*cfg.window_pos_draw)

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [draw_window.close]

    try:
        # 初回は差し替え前の点群が無いので、失敗したらそのまま起動失敗とする。
        draw_window.regeneration.regenerate(galaxy_params)

        # `tasks` はループ駆動用（イベント処理→描画→flip の対象）。
        tasks = [WindowTask(window=draw_window.window, draw_frame=draw_window.draw_frame)]

        if parameter_gui:
            # Parameter GUI は依存が重い（pyimgui）ので、使うときだけ遅延 import する。
            from galaxia.interactive.runtime.parameter_gui_system import (
                ParameterGUIWindowSystem,
            )

            binding = ControlBinding(galaxy_params, draw_window.regeneration.regenerate)
            # 確定時の再生成は描画ウィンドウのフレーム冒頭（描画側コンテキストが current）で行う。
            draw_window.bind_controls(binding)
            gui = ParameterGUIWindowSystem(binding=binding)
            gui.window.set_location(*cfg.window_pos_parameter_gui)
            closers.append(gui.close)
            tasks.append(WindowTask(window=gui.window, draw_frame=gui.draw_frame))

        RenderLoop(tasks, fps=fps).run()
    finally:
        # 作成順の逆で閉じることで、後に作ったサブシステム（GUI など）から先に破棄できる。
        for close in reversed(closers):
            try:
                close()
            except Exception:
                _logger.exception("Failed to close subsystem: %r", close)
