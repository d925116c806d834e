# どこで: `src/galaxia/interactive/draw_window.py`。
# 何を: ライブ描画用の pyglet ウィンドウ生成を行う。
# なぜ: interactive 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

from typing import TYPE_CHECKING

from galaxia.interactive.render_settings import RenderSettings

if TYPE_CHECKING:
    from pyglet.window import Window


def create_draw_window(settings: RenderSettings) -> Window:
    """設定に基づき描画ウィンドウを生成する。"""

    # pyglet.window / pyglet.gl は import 時にディスプレイ周りのライブラリを読むため、ここで遅延 import する。
    import pyglet
    from pyglet.gl import Config

    # 点の縁を滑らかにするために MSAA を有効化
    config = Config(double_buffer=True, depth_size=24, sample_buffers=1, samples=4)  # type: ignore[abstract]
    width, height = settings.window_size
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        resizable=True,
        caption="Galaxy",
        config=config,
    )
    return window
