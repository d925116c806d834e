# どこで: `src/galaxia/interactive/__init__.py`。
# 何を: ライブ描画（pyglet/moderngl/imgui）に依存する interactive 層をまとめる。
# なぜ: core をヘッドレスに保ち、ウィンドウ依存をこの層に閉じ込めるため。
