from __future__ import annotations

import pytest

from dravi.coordinates import SYSTEM_BY_KEY, CoordinateSystem, CoordinateTransform


def _transform() -> CoordinateTransform:
    return CoordinateTransform(origin_x=40.0, origin_y=20.0, width=80, limit_y=200)


def test_cartesian_target_is_origin_relative_with_y_up() -> None:
    transform = _transform()

    target = transform.parse_target("3,4", CoordinateSystem.CARTESIAN)

    assert target == (43.0, 16.0)
    assert transform.relative_coordinates(*target, CoordinateSystem.CARTESIAN) == (3.0, 4.0)


def test_polar_target_uses_degrees() -> None:
    target = _transform().parse_target("5, 90", CoordinateSystem.POLAR)

    assert target is not None
    assert target[0] == pytest.approx(40.0)
    assert target[1] == pytest.approx(15.0)


def test_cylindrical_z_is_flattened_onto_screen_y() -> None:
    target = _transform().parse_target("2,0,10", CoordinateSystem.CYLINDRICAL)

    assert target == pytest.approx((42.0, 19.0))


def test_targets_are_clamped_to_the_canvas() -> None:
    transform = _transform()

    assert transform.parse_target("1000,1000", CoordinateSystem.CARTESIAN) == (79.0, 0.0)
    assert transform.parse_target("-1000,-1000", CoordinateSystem.CARTESIAN) == (0.0, 199.0)


@pytest.mark.parametrize(
    ("text", "system"),
    [
        ("", CoordinateSystem.CARTESIAN),
        ("3", CoordinateSystem.CARTESIAN),
        ("3,4,5", CoordinateSystem.CARTESIAN),
        ("a,b", CoordinateSystem.CARTESIAN),
        ("nan,1", CoordinateSystem.CARTESIAN),
        ("inf,2", CoordinateSystem.POLAR),
        ("1,2", CoordinateSystem.CYLINDRICAL),
        ("1,,2", CoordinateSystem.CYLINDRICAL),
    ],
)
def test_malformed_input_yields_no_target(text: str, system: CoordinateSystem) -> None:
    assert _transform().parse_target(text, system) is None


def test_describe_formats_each_system() -> None:
    transform = _transform()

    assert transform.describe(40.0, 20.0, CoordinateSystem.CARTESIAN) == "(0.0, 0.0)"
    assert transform.describe(43.0, 16.0, CoordinateSystem.POLAR) == "(r:5.0, θ:53.1°)"
    assert (
        transform.describe(42.0, 19.0, CoordinateSystem.CYLINDRICAL)
        == "(ρ:2.0, θ:26.6°, z:10.0)"
    )


def test_set_origin_moves_the_reference_point() -> None:
    transform = _transform()
    transform.set_origin(10.0, 10.0)

    assert transform.parse_target("0,0", CoordinateSystem.CARTESIAN) == (10.0, 10.0)


def test_system_metadata() -> None:
    assert SYSTEM_BY_KEY["3"] is CoordinateSystem.CYLINDRICAL
    assert CoordinateSystem.POLAR.arity == 2
    assert CoordinateSystem.CYLINDRICAL.arity == 3
    assert CoordinateSystem.POLAR.hint == "r,θ(deg)"
    assert CoordinateSystem.CARTESIAN.label == "Cartesian"
