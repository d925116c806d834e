# どこで: `src/galaxia/core/errors.py`。
# 何を: 再生成の失敗を表す例外階層を定義する。
# なぜ: 「生成の失敗」と「GPU 資源構築の失敗」を呼び出し側が区別して扱えるようにするため。

from __future__ import annotations


class GalaxiaError(RuntimeError):
    """galaxia が送出する例外の基底。"""


class GenerationError(GalaxiaError):
    """点群の生成に失敗した（巨大 count でのメモリ不足など）。"""


class ResourceBuildError(GalaxiaError):
    """GPU 常駐資源（VBO/VAO）の構築に失敗した。"""


__all__ = ["GalaxiaError", "GenerationError", "ResourceBuildError"]
