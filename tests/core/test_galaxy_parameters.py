"""core.parameters の GalaxyParameters / ParamSpec をテスト。"""

from __future__ import annotations

import math

import pytest

from galaxia.core.parameters import PARAM_SPECS, GalaxyParameters, step_decimals


def test_param_specs_declare_ranges_and_steps_in_display_order() -> None:
    assert list(PARAM_SPECS) == [
        "count",
        "size",
        "radius",
        "branches",
        "spin",
        "randomness",
        "randomness_power",
    ]
    expected = {
        "count": ("int", 100, 1_000_000, 100),
        "size": ("float", 0.001, 0.1, 0.001),
        "radius": ("float", 0.01, 20.0, 0.01),
        "branches": ("int", 2, 20, 1),
        "spin": ("float", -5.0, 5.0, 0.001),
        "randomness": ("float", 0.0, 2.0, 0.001),
        "randomness_power": ("float", 1.0, 10.0, 0.001),
    }
    for name, (kind, lo, hi, step) in expected.items():
        spec = PARAM_SPECS[name]
        assert (spec.kind, spec.ui_min, spec.ui_max, spec.step) == (kind, lo, hi, step)
    assert PARAM_SPECS["randomness_power"].label == "randomnessPower"


def test_defaults_are_within_range() -> None:
    params = GalaxyParameters()
    assert params.as_dict() == {
        "count": 100_000,
        "size": 0.01,
        "radius": 5.0,
        "branches": 3,
        "spin": 1.0,
        "randomness": 0.2,
        "randomness_power": 3.0,
    }


@pytest.mark.parametrize(
    ("name", "value", "expected"),
    [
        ("count", 0, 100),
        ("count", 5_000_000, 1_000_000),
        ("branches", 1, 2),
        ("branches", 99, 20),
        ("size", -1.0, 0.001),
        ("spin", 12.0, 5.0),
        ("spin", -12.0, -5.0),
        ("randomness", math.inf, 2.0),
        ("randomness_power", 0.0, 1.0),
    ],
)
def test_out_of_range_writes_are_clamped(name: str, value: float, expected: float) -> None:
    params = GalaxyParameters()
    setattr(params, name, value)
    assert getattr(params, name) == pytest.approx(expected)


def test_values_are_snapped_to_step() -> None:
    params = GalaxyParameters()
    assert params.set("count", 1234) == 1200
    assert params.set("count", 1260) == 1300
    assert params.set("branches", 4.6) == 5
    assert params.set("radius", 3.14159) == pytest.approx(3.14)
    assert params.set("spin", 0.12345) == pytest.approx(0.123)
    assert isinstance(params.count, int)
    assert isinstance(params.branches, int)


def test_constructor_normalizes_values() -> None:
    params = GalaxyParameters(count=42, branches=0, radius=100.0)
    assert params.count == 100
    assert params.branches == 2
    assert params.radius == pytest.approx(20.0)


def test_from_mapping_keeps_defaults_for_missing_fields() -> None:
    params = GalaxyParameters.from_mapping({"count": 400, "spin": -2.5})
    assert params.count == 400
    assert params.spin == pytest.approx(-2.5)
    assert params.radius == pytest.approx(5.0)


def test_unknown_parameter_raises_key_error() -> None:
    params = GalaxyParameters()
    with pytest.raises(KeyError):
        params.set("arms", 3)
    with pytest.raises(KeyError):
        GalaxyParameters.from_mapping({"arms": 3})


@pytest.mark.parametrize("value", ["3", True, None])
def test_non_numeric_values_raise_type_error(value: object) -> None:
    params = GalaxyParameters()
    with pytest.raises(TypeError):
        params.set("count", value)


def test_nan_is_rejected() -> None:
    params = GalaxyParameters()
    with pytest.raises(ValueError):
        params.set("radius", math.nan)
    assert params.radius == pytest.approx(5.0)


def test_copy_is_independent() -> None:
    params = GalaxyParameters()
    other = params.copy()
    other.count = 200
    assert params.count == 100_000
    assert other == GalaxyParameters(count=200)


def test_step_decimals() -> None:
    assert step_decimals(0.001) == 3
    assert step_decimals(0.01) == 2
    assert step_decimals(1) == 0
    assert step_decimals(100) == 0
