"""Basic 2D linear algebra utilities for spiralcad.

Vectors are ``numpy`` arrays of shape ``(2,)`` and matrices are ``(2, 2)``
arrays, so callers can mix these helpers freely with plain numpy code.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

TWO_PI = 2.0 * math.pi


def vec2(x: float, y: float) -> np.ndarray:
    return np.array([x, y], dtype=float)


def as_vec2(p: Sequence[float]) -> np.ndarray:
    """Return ``p`` as a float vector, rejecting anything but two coordinates."""
    v = np.asarray(p, dtype=float)
    if v.shape != (2,):
        raise ValueError(f"Expected a 2D point, got shape {v.shape}")
    return v.copy()


def unit(angle: float) -> np.ndarray:
    """Unit vector pointing at ``angle`` radians."""
    return np.array([math.cos(angle), math.sin(angle)])


def perp(v: np.ndarray) -> np.ndarray:
    """Rotate ``v`` by +90 degrees."""
    return np.array([-v[1], v[0]])


def rotation2(theta: float, scale: float = 1.0) -> np.ndarray:
    """Rotation by ``theta`` combined with a uniform ``scale``."""
    c = scale * math.cos(theta)
    s = scale * math.sin(theta)
    return np.array([[c, -s], [s, c]])


def reflected_rotation2(theta: float, scale: float = 1.0) -> np.ndarray:
    """Like :func:`rotation2` but with the first column negated.

    This is the rotation-scale composed with a reflection across the
    y axis, i.e. ``rotation2(theta, scale) @ diag(-1, 1)``.
    """
    c = scale * math.cos(theta)
    s = scale * math.sin(theta)
    return np.array([[-c, -s], [-s, c]])


def normalize_angle(angle: float) -> float:
    """Map ``angle`` into the principal range (-pi, pi]."""
    a = math.remainder(angle, TWO_PI)
    if a <= -math.pi:
        a += TWO_PI
    return a
