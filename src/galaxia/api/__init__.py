# どこで: `src/galaxia/api/__init__.py`。
# 何を: 公開 API（run）を集約する。
# なぜ: 利用側の import を `galaxia.api` に固定し、内部構成の変更から切り離すため。

from __future__ import annotations

from .runner import run

__all__ = ["run"]
