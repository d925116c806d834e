# どこで: `src/galaxia/interactive/gl/shader.py`。
# 何を: 点群描画用の GLSL シェーダプログラムを生成する。
# なぜ: シェーダ文字列と uniform 名を renderer 本体から分離して見通しを良くするため。

from __future__ import annotations

from typing import Any

_VERTEX_SHADER = """
#version 410

in vec3 in_position;

uniform mat4 view;
uniform mat4 projection;
// material.size * pixel_ratio
uniform float point_size;
// 論理ウィンドウ高さ * 0.5（距離減衰の基準）
uniform float size_scale;
uniform bool size_attenuation;

void main() {
    vec4 mv_position = view * vec4(in_position, 1.0);
    gl_Position = projection * mv_position;

    float size = point_size;
    if (size_attenuation) {
        size *= size_scale / max(-mv_position.z, 1e-4);
    }
    gl_PointSize = size;
}
"""

_FRAGMENT_SHADER = """
#version 410

uniform vec3 color;
uniform float opacity;

out vec4 frag_color;

void main() {
    frag_color = vec4(color, opacity);
}
"""


class Shader:
    """点群用シェーダの生成窓口。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """moderngl.Program を生成して返す。"""
        return ctx.program(vertex_shader=_VERTEX_SHADER, fragment_shader=_FRAGMENT_SHADER)
