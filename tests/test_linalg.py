import math

import numpy as np
import pytest

from spiralcad.linalg import (
    as_vec2,
    normalize_angle,
    perp,
    reflected_rotation2,
    rotation2,
    unit,
    vec2,
)


def test_rotation2_with_scale():
    m = rotation2(math.pi / 2, 2.0)
    rotated = m @ vec2(1.0, 0.0)
    assert math.isclose(rotated[0], 0.0, abs_tol=1e-12)
    assert math.isclose(rotated[1], 2.0, abs_tol=1e-12)


def test_reflected_rotation_negates_first_column():
    theta = 0.7
    expected = rotation2(theta, 3.0) @ np.diag([-1.0, 1.0])
    np.testing.assert_allclose(reflected_rotation2(theta, 3.0), expected, atol=1e-12)
    assert np.linalg.det(reflected_rotation2(theta)) == pytest.approx(-1.0)


def test_perp_and_unit():
    np.testing.assert_allclose(perp(vec2(1.0, 0.0)), [0.0, 1.0])
    np.testing.assert_allclose(perp(vec2(0.0, 1.0)), [-1.0, 0.0])
    np.testing.assert_allclose(unit(math.pi / 2), [0.0, 1.0], atol=1e-12)
    assert np.linalg.norm(unit(2.3)) == pytest.approx(1.0)


def test_as_vec2_copies_and_validates():
    src = [1.0, 2.0]
    v = as_vec2(src)
    v[0] = 5.0
    assert src[0] == 1.0
    with pytest.raises(ValueError):
        as_vec2([1.0, 2.0, 3.0])


def test_normalize_angle_principal_range():
    assert normalize_angle(0.5) == pytest.approx(0.5)
    assert normalize_angle(math.pi) == pytest.approx(math.pi)
    assert normalize_angle(-math.pi) == pytest.approx(math.pi)
    assert normalize_angle(2 * math.pi + 0.1) == pytest.approx(0.1)
    assert normalize_angle(-2 * math.pi - 0.1) == pytest.approx(-0.1)
    assert abs(normalize_angle(3 * math.pi)) == pytest.approx(math.pi)


@pytest.mark.parametrize("angle", np.linspace(-20.0, 20.0, 41))
def test_normalize_angle_preserves_direction(angle):
    a = normalize_angle(angle)
    assert -math.pi < a <= math.pi
    np.testing.assert_allclose(unit(a), unit(angle), atol=1e-12)
