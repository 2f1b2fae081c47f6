"""Closed-form regimes of a clothoid segment.

A segment with curvature ``K`` and curvature rate ``D`` is one of

* a straight line (``D`` and ``K`` both negligible),
* a circular arc (``D`` negligible),
* a true clothoid.

Each regime maps arc length ``s`` to a canonical parameter
``t = t1 + s * t_slope`` and places a canonical curve in the world with

    pos(s) = origin_shift + transform @ canonical(t)

The canonical curves are ``(t, 0)``, ``(cos t, sin t)`` and the Fresnel
pair ``(C(t), S(t))`` respectively.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ..linalg import reflected_rotation2, rotation2, unit
from ..numeric import TolerancePolicy
from .curve import Param
from .fresnel import fresnel

HALF_PI = 0.5 * math.pi


@dataclass(frozen=True, eq=False)
class Regime:
    """Precomputed coefficients shared by every regime."""

    kind: ClassVar[str] = ""

    t1: float
    t_slope: float
    transform: np.ndarray
    origin_shift: np.ndarray

    def canonical(self, t: float) -> np.ndarray:
        raise NotImplementedError

    def position(self, s: float) -> np.ndarray:
        return self.origin_shift + self.transform @ self.canonical(self.t1 + s * self.t_slope)

    def curvature_jacobian(self, params: np.ndarray, s: float) -> np.ndarray:
        """Derivatives of ``position(s)`` with respect to curvature and its rate.

        Returns a ``(2, 2)`` array whose rows are d/dCURVATURE and
        d/dDCURVATURE.
        """
        raise NotImplementedError


def _origin_shift(params: np.ndarray, transform: np.ndarray, canonical_start: np.ndarray) -> np.ndarray:
    start = params[[Param.X, Param.Y]]
    return start - transform @ canonical_start


@dataclass(frozen=True, eq=False)
class FlatRegime(Regime):
    kind: ClassVar[str] = "flat"

    @classmethod
    def build(cls, params: np.ndarray) -> "FlatRegime":
        transform = rotation2(params[Param.ANGLE])
        return cls(0.0, 1.0, transform, _origin_shift(params, transform, np.zeros(2)))

    def canonical(self, t: float) -> np.ndarray:
        return np.array([t, 0.0])

    def curvature_jacobian(self, params: np.ndarray, s: float) -> np.ndarray:
        angle = params[Param.ANGLE]
        normal = np.array([-math.sin(angle), math.cos(angle)])
        return np.vstack([(0.5 * s * s) * normal, (s * s * s / 6.0) * normal])


@dataclass(frozen=True, eq=False)
class ArcRegime(Regime):
    kind: ClassVar[str] = "arc"

    @classmethod
    def build(cls, params: np.ndarray) -> "ArcRegime":
        curv = params[Param.CURVATURE]
        transform = rotation2(params[Param.ANGLE] - HALF_PI, 1.0 / curv)
        return cls(0.0, curv, transform, _origin_shift(params, transform, np.array([1.0, 0.0])))

    def canonical(self, t: float) -> np.ndarray:
        return np.array([math.cos(t), math.sin(t)])

    def curvature_jacobian(self, params: np.ndarray, s: float) -> np.ndarray:
        # Limits of the clothoid expressions as DCURVATURE -> 0.
        curv = params[Param.CURVATURE]
        start_angle = params[Param.ANGLE]
        cur_angle = start_angle + s * (curv + 0.5 * s * params[Param.DCURVATURE])
        cos_cur, sin_cur = math.cos(cur_angle), math.sin(cur_angle)
        cos_start, sin_start = math.cos(start_angle), math.sin(start_angle)
        curvs = curv * s
        quad = 0.5 * curvs * curvs - 1.0

        d_curv = np.array([
            curvs * cos_cur + sin_start - sin_cur,
            curvs * sin_cur + cos_cur - cos_start,
        ]) / (curv * curv)
        d_dcurv = np.array([
            cos_start + quad * cos_cur - curvs * sin_cur,
            sin_start + quad * sin_cur + curvs * cos_cur,
        ]) / (curv * curv * curv)
        return np.vstack([d_curv, d_dcurv])


@dataclass(frozen=True, eq=False)
class ClothoidRegime(Regime):
    kind: ClassVar[str] = "clothoid"

    scale: float = 1.0
    angle_shift: float = 0.0

    @property
    def reflected(self) -> bool:
        return self.t_slope < 0.0

    @classmethod
    def build(cls, params: np.ndarray) -> "ClothoidRegime":
        curv = params[Param.CURVATURE]
        dcurv = params[Param.DCURVATURE]
        scale = math.sqrt(abs(1.0 / (math.pi * dcurv)))
        t1 = curv * scale
        t_slope = dcurv * scale

        # The Fresnel parametrization only turns left, so a negative
        # curvature rate needs a reflection.
        if t_slope > 0.0:
            angle_shift = params[Param.ANGLE] - t1 * t1 * HALF_PI
            transform = rotation2(angle_shift, math.pi * scale)
        else:
            angle_shift = params[Param.ANGLE] + t1 * t1 * HALF_PI
            transform = reflected_rotation2(angle_shift, math.pi * scale)

        canonical_start = cls._fresnel_point(t1)
        return cls(
            t1,
            t_slope,
            transform,
            _origin_shift(params, transform, canonical_start),
            scale,
            angle_shift,
        )

    @staticmethod
    def _fresnel_point(t: float) -> np.ndarray:
        s, c = fresnel(t)
        return np.array([c, s])

    def canonical(self, t: float) -> np.ndarray:
        return self._fresnel_point(t)

    def curvature_jacobian(self, params: np.ndarray, s: float) -> np.ndarray:
        # pos(s) = start + transform @ (cs(t) - cs(t1)), so
        #   dpos = dtransform @ (cs - cs1) + transform @ (cs'(t) dt - cs'(t1) dt1)
        # with cs'(t) = (cos(pi t^2 / 2), sin(pi t^2 / 2)).
        curv = params[Param.CURVATURE]
        dcurv = params[Param.DCURVATURE]
        scale = self.scale
        t1 = self.t1
        t = t1 + s * self.t_slope

        dt1 = np.array([scale, -curv * scale / (2.0 * dcurv)])
        dt = dt1 + np.array([0.0, 0.5 * scale * s])

        diff = self.canonical(t) - self.canonical(t1)
        result = (
            np.outer(self.transform @ unit(HALF_PI * t * t), dt)
            - np.outer(self.transform @ unit(HALF_PI * t1 * t1), dt1)
        )

        cos_as, sin_as = math.cos(self.angle_shift), math.sin(self.angle_shift)
        dmat_dcurv = np.array([[sin_as, cos_as], [-cos_as, sin_as]])
        dmat_dcurv *= math.pi * scale * curv / dcurv

        curv_sqr = curv * curv
        diag = -dcurv * cos_as - curv_sqr * sin_as
        off = dcurv * sin_as - curv_sqr * cos_as
        dmat_ddcurv = np.array([[diag, off], [-off, diag]])
        dmat_ddcurv *= HALF_PI * scale / (dcurv * dcurv)

        if self.reflected:
            dmat_dcurv[:, 0] *= -1.0
            dmat_ddcurv[:, 0] *= -1.0

        result[:, 0] += dmat_dcurv @ diff
        result[:, 1] += dmat_ddcurv @ diff
        return result.T


def select_regime(params: np.ndarray, tolerance: TolerancePolicy) -> Regime:
    """Pick and build the regime matching ``params``."""
    if abs(params[Param.DCURVATURE]) < tolerance.arc:
        if abs(params[Param.CURVATURE]) < tolerance.flat:
            return FlatRegime.build(params)
        return ArcRegime.build(params)
    return ClothoidRegime.build(params)
