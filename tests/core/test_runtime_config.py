from pathlib import Path

import pytest

from galaxia.core.runtime_config import runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.window_pos_draw == (25, 25)
    assert cfg.window_pos_parameter_gui == (850, 25)
    assert cfg.draw_window_size == (800, 600)
    assert cfg.parameter_gui_window_size == (360, 320)
    assert cfg.max_pixel_ratio == 2.0


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    assert runtime_config() is runtime_config()
    first = runtime_config()
    set_config_path(None)
    assert runtime_config() is not first


def test_discovered_config_overrides_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".galaxia" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("render:\n  max_pixel_ratio: 1.0\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.max_pixel_ratio == 1.0
    assert cfg.draw_window_size == (800, 600)


def test_explicit_config_overrides_discovered_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".galaxia" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("render:\n  max_pixel_ratio: 1.0\n", encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text(
        "ui:\n"
        "  window_positions:\n"
        "    draw: [0, 0]\n"
        "    parameter_gui: [900, 0]\n"
        "  draw_window:\n"
        "    size: [1280, 720]\n"
        "  parameter_gui:\n"
        "    window_size: [400, 300]\n",
        encoding="utf-8",
    )
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.draw_window_size == (1280, 720)
    assert cfg.window_pos_parameter_gui == (900, 0)
    assert cfg.max_pixel_ratio == 1.0


def test_explicit_config_path_missing_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


def test_unsupported_version_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("version: 2\n", encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(RuntimeError):
        runtime_config()


def test_invalid_window_size_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text(
        "ui:\n"
        "  window_positions:\n"
        "    draw: [0, 0]\n"
        "    parameter_gui: [0, 0]\n"
        "  draw_window:\n"
        "    size: [800]\n"
        "  parameter_gui:\n"
        "    window_size: [400, 300]\n",
        encoding="utf-8",
    )
    set_config_path(explicit)
    with pytest.raises(RuntimeError):
        runtime_config()


def test_non_positive_pixel_ratio_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("render:\n  max_pixel_ratio: 0\n", encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(ValueError):
        runtime_config()
