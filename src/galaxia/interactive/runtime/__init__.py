# どこで: `src/galaxia/interactive/runtime/__init__.py`。
# 何を: interactive 実行時のサブシステム（描画 / 再生成 / ループ）を置くパッケージ。
# なぜ: pyglet ループ周りの責務を api 層から切り離すため。
