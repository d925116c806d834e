# どこで: `src/galaxia/core/__init__.py`。
# 何を: ヘッドレスに使える core 層（パラメータ/生成/設定）をまとめる。
# なぜ: interactive 依存（pyglet/moderngl/imgui）を持ち込まずに生成ロジックを使えるようにするため。
