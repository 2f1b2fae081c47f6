"""Parameter Jacobian of clothoid positions checked against finite differences."""

import numpy as np
import pytest

from spiralcad.geom import NUM_PARAMS, Clothoid, Param
from spiralcad.linalg import perp

SEGMENTS = {
    "flat": ((1.0, 2.0), 0.3, 2.0, 0.0, 0.0),
    "arc": ((1.0, 2.0), 0.3, 2.0, 0.7, 0.7),
    "arc_cw": ((-1.0, 0.5), -2.0, 3.0, -0.4, -0.4),
    "clothoid": ((1.0, 2.0), 0.3, 2.0, 0.2, 1.5),
    "clothoid_decreasing": ((0.0, 0.0), 1.0, 2.5, 0.8, -0.6),
    "clothoid_inflection": ((3.0, -1.0), -2.5, 4.0, -1.0, 1.0),
    "clothoid_from_straight": ((0.0, 0.0), 0.0, 1.0, 0.0, 1.0),
}


def fd_jacobian(seg, s, h=1e-4):
    """Centered finite differences of ``pos(s)`` for every parameter."""
    base = seg.params
    out = np.zeros((NUM_PARAMS, 2))
    for i in range(NUM_PARAMS):
        plus = base.copy()
        minus = base.copy()
        plus[i] += h
        minus[i] -= h
        out[i] = (Clothoid.from_params(plus).pos(s) - Clothoid.from_params(minus).pos(s)) / (2 * h)
    return out


@pytest.mark.parametrize("name", sorted(SEGMENTS))
@pytest.mark.parametrize("fraction", [0.0, 0.35, 1.0])
def test_jacobian_matches_finite_differences(name, fraction):
    seg = Clothoid(*SEGMENTS[name])
    s = fraction * seg.length
    np.testing.assert_allclose(seg.derivative_at(s), fd_jacobian(seg, s), rtol=1e-4, atol=1e-6)


@pytest.mark.parametrize("name", sorted(SEGMENTS))
def test_jacobian_fixed_rows(name):
    seg = Clothoid(*SEGMENTS[name])
    s = 0.6 * seg.length
    jac = seg.derivative_at(s)

    assert jac.shape == (NUM_PARAMS, 2)
    np.testing.assert_array_equal(jac[Param.X], [1.0, 0.0])
    np.testing.assert_array_equal(jac[Param.Y], [0.0, 1.0])
    np.testing.assert_array_equal(jac[Param.LENGTH], [0.0, 0.0])
    np.testing.assert_allclose(jac[Param.ANGLE], perp(seg.pos(s) - seg.start_pos()))


def test_jacobian_is_zero_at_start_for_shape_params():
    seg = Clothoid(*SEGMENTS["clothoid"])
    jac = seg.derivative_at(0.0)
    np.testing.assert_allclose(jac[[Param.ANGLE, Param.CURVATURE, Param.DCURVATURE]], 0.0, atol=1e-9)


def test_flat_jacobian_closed_form():
    seg = Clothoid((0.0, 0.0), 0.0, 2.0, 0.0, 0.0)
    jac = seg.derivative_at(2.0)
    np.testing.assert_allclose(jac[Param.CURVATURE], [0.0, 2.0])
    np.testing.assert_allclose(jac[Param.DCURVATURE], [0.0, 8.0 / 6.0])


def test_arc_jacobian_continuous_with_clothoid():
    """The arc closed forms are the limit of the clothoid ones."""
    arc = Clothoid((0.0, 0.0), 0.5, 2.0, 0.7, 0.7)
    near = Clothoid((0.0, 0.0), 0.5, 2.0, 0.7, 0.7 + 2e-3)
    assert arc.is_arc and not near.is_arc
    np.testing.assert_allclose(arc.derivative_at(1.5), near.derivative_at(1.5), atol=2e-3)
