# どこで: `src/galaxia/interactive/runtime/window_loop.py`。
# 何を: pyglet の複数ウィンドウ（描画 + Parameter GUI）を 1 つの app loop で回すランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せつつ、フレームの再スケジュールを明示的な状態として扱うため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

STATE_IDLE = "idle"
STATE_SCHEDULED = "scheduled"


@dataclass(frozen=True, slots=True)
class WindowTask:
    """1つの pyglet window と「flip しない描画関数」を束ねる。"""

    # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
    window: Any

    # 1フレーム分の描画処理（back buffer へ描くだけ）。
    # `switch_to()` / `flip()` は pyglet（`Window.draw()`）が担当する前提。
    draw_frame: Callable[[], None]


class RenderLoop:
    """全ウィンドウを同一ループで回す。

    状態は `idle`（未開始 / 終了後）と `scheduled`（tick が clock に登録されている間）の 2 つ。
    tick は「ウィンドウを描く」だけで、点群の再生成を待つことはない。
    """

    def __init__(
        self,
        tasks: list[WindowTask],
        *,
        fps: float,
        app: Any | None = None,
        clock: Any | None = None,
    ) -> None:
        """ループを初期化する。

        Parameters
        ----------
        tasks : list[WindowTask]
            1 フレームごとに描画したいウィンドウと描画処理。
        fps : float
            目標フレームレート。`<=0` の場合はスロットリングしない。
        app, clock : Any | None
            `pyglet.app` / `pyglet.clock` の差し替え口。None なら pyglet のものを使う。
        """

        self._tasks = list(tasks)
        self._fps = float(fps)
        self._app = app
        self._clock = clock
        self._state = STATE_IDLE
        self.frame_count = 0

    @property
    def state(self) -> str:
        return self._state

    def _resolve_backends(self) -> tuple[Any, Any]:
        app = self._app
        clock = self._clock
        if app is None or clock is None:
            import pyglet

            app = pyglet.app if app is None else app
            clock = pyglet.clock if clock is None else clock
        return app, clock

    def tick(self, dt: float) -> None:
        """1 フレーム進める（開いている各ウィンドウを順に draw）。"""

        app, _clock = self._resolve_backends()
        for task in self._tasks:
            # 閉じられたウィンドウへ draw すると例外になり得るため、開いているものだけ描く。
            if task.window not in app.windows:
                continue
            task.window.draw(dt)
        self.frame_count += 1

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        app, clock = self._resolve_backends()

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            app.exit()

        for task in self._tasks:
            # どれかのウィンドウを閉じたら、ループ全体を止める。
            task.window.push_handlers(on_close=request_exit)
            task.window.push_handlers(on_draw=task.draw_frame)

        if self._fps <= 0:
            clock.schedule(self.tick)
        else:
            clock.schedule_interval(self.tick, 1.0 / float(self._fps))
        self._state = STATE_SCHEDULED

        try:
            app.run(interval=None)
        finally:
            clock.unschedule(self.tick)
            self._state = STATE_IDLE
