# どこで: `src/galaxia/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ウィンドウ配置や解像度上限を、コードを触らずにユーザーが変えられるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """galaxia の実行時設定。"""

    config_path: Path | None
    window_pos_draw: tuple[int, int]
    window_pos_parameter_gui: tuple[int, int]
    draw_window_size: tuple[int, int]
    parameter_gui_window_size: tuple[int, int]
    max_pixel_ratio: float


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".galaxia" / "config.yaml",
        Path.home() / ".config" / "galaxia" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        seq = list(value)
    except TypeError as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        return (int(seq[0]), int(seq[1]))
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc


def _as_float(value: Any, *, key: str) -> float:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    blob = (
        resources.files("galaxia")
        .joinpath("resource", "default_config.yaml")
        .read_text(encoding="utf-8")
    )
    return _load_yaml_text(blob, source="galaxia/resource/default_config.yaml")


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち、トップレベルキー単位）:
    1) 同梱 default_config.yaml
    2) `./.galaxia/config.yaml` / `~/.config/galaxia/config.yaml`（先に見つかった方）
    3) `set_config_path()` / `run(..., config_path=...)` の明示パス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    for path in (discovered_path, explicit_path):
        if path is not None:
            payload.update(_load_yaml_text(path.read_text(encoding="utf-8"), source=str(path)))

    version = payload.get("version")
    try:
        version_i = int(version)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_positions = _as_mapping(ui.get("window_positions"), key="ui.window_positions")
    draw_window = _as_mapping(ui.get("draw_window"), key="ui.draw_window")
    parameter_gui = _as_mapping(ui.get("parameter_gui"), key="ui.parameter_gui")

    render = _as_mapping(payload.get("render"), key="render")
    max_pixel_ratio = _as_float(render.get("max_pixel_ratio"), key="render.max_pixel_ratio")
    if max_pixel_ratio <= 0:
        raise ValueError(f"render.max_pixel_ratio は正の値である必要があります: got={max_pixel_ratio}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        window_pos_draw=_as_int_pair(
            window_positions.get("draw"), key="ui.window_positions.draw"
        ),
        window_pos_parameter_gui=_as_int_pair(
            window_positions.get("parameter_gui"), key="ui.window_positions.parameter_gui"
        ),
        draw_window_size=_as_int_pair(draw_window.get("size"), key="ui.draw_window.size"),
        parameter_gui_window_size=_as_int_pair(
            parameter_gui.get("window_size"), key="ui.parameter_gui.window_size"
        ),
        max_pixel_ratio=float(max_pixel_ratio),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
