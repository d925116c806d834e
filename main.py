"""
どこで: リポジトリ直下 `main.py`。
何を: 既定パラメータで銀河をプレビュー表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging

from galaxia.api import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(
        params={
            "count": 100_000,
            "size": 0.01,
            "radius": 5.0,
            "branches": 3,
            "spin": 1.0,
            "randomness": 0.2,
            "randomness_power": 3.0,
        },
        background_color=(0.0, 0.0, 0.0),
        parameter_gui=True,
    )
