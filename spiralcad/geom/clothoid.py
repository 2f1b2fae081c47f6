"""Clothoid segments: planar curves whose curvature is linear in arc length.

Lines and circular arcs are handled as degenerate clothoids, so a single
:class:`Clothoid` type can represent any of the three.  Cached closed-form
coefficients (see :mod:`spiralcad.geom.regimes`) are rebuilt eagerly on
every parameter change.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from ..linalg import as_vec2, normalize_angle, perp, unit
from ..numeric import get_tolerance
from .curve import NUM_PARAMS, CurvePrimitive, CurveSample, Param
from .regimes import ArcRegime, FlatRegime, Regime, select_regime

log = logging.getLogger("spiralcad.geom")


class Clothoid(CurvePrimitive):
    """Clothoid segment defined by start point, start angle, length and curvatures.

    Parameters
    ----------
    start:
        Start point ``(x, y)``.
    start_angle:
        Tangent direction at the start, in radians.
    length:
        Arc length.  Negative lengths are accepted but reported by
        :meth:`is_valid`.
    curvature:
        Curvature at the start.
    end_curvature:
        Curvature at the end; the curvature rate is
        ``(end_curvature - curvature) / length``.
    """

    def __init__(
        self,
        start: Sequence[float],
        start_angle: float,
        length: float,
        curvature: float,
        end_curvature: float,
    ) -> None:
        params = np.zeros(NUM_PARAMS)
        params[[Param.X, Param.Y]] = as_vec2(start)
        params[Param.ANGLE] = normalize_angle(start_angle)
        params[Param.LENGTH] = length
        params[Param.CURVATURE] = curvature
        # A point segment has no meaningful curvature rate.
        params[Param.DCURVATURE] = (end_curvature - curvature) / length if length != 0.0 else 0.0
        self._params = params
        if not self.is_valid():
            log.debug("Clothoid constructed with negative length %g", length)
        self._params_changed()

    @classmethod
    def from_params(cls, values: Sequence[float]) -> "Clothoid":
        """Build a segment directly from a parameter vector in :class:`Param` order."""
        obj = cls.__new__(cls)
        obj.set_params(values)
        return obj

    def _params_changed(self) -> None:
        self._regime = select_regime(self._params, get_tolerance())
        log.debug(
            "Clothoid regime %s (t1=%g, t_slope=%g)",
            self._regime.kind,
            self._regime.t1,
            self._regime.t_slope,
        )

    def __repr__(self) -> str:
        p = self._params
        return (
            f"Clothoid(start=({p[Param.X]:.6g}, {p[Param.Y]:.6g}), angle={p[Param.ANGLE]:.6g}, "
            f"length={p[Param.LENGTH]:.6g}, curvature={p[Param.CURVATURE]:.6g}, "
            f"dcurvature={p[Param.DCURVATURE]:.6g}, regime={self._regime.kind})"
        )

    # ------------------------------------------------------------------
    # Cached state
    # ------------------------------------------------------------------

    @property
    def regime(self) -> Regime:
        return self._regime

    @property
    def is_arc(self) -> bool:
        """True for lines and circular arcs (curvature effectively constant)."""
        return isinstance(self._regime, (FlatRegime, ArcRegime))

    @property
    def is_flat(self) -> bool:
        return isinstance(self._regime, FlatRegime)

    @property
    def t1(self) -> float:
        return self._regime.t1

    @property
    def t_slope(self) -> float:
        return self._regime.t_slope

    @property
    def transform(self) -> np.ndarray:
        return self._regime.transform.copy()

    @property
    def origin_shift(self) -> np.ndarray:
        return self._regime.origin_shift.copy()

    @property
    def dcurvature(self) -> float:
        return float(self._params[Param.DCURVATURE])

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def eval(self, s: float, pos: bool = True, der: bool = False, der2: bool = False) -> CurveSample:
        out = CurveSample()
        if pos:
            out.pos = self._regime.position(s)
        if der or der2:
            tangent = unit(self.angle(s))
            if der:
                out.der = tangent
            if der2:
                out.der2 = self.curvature(s) * perp(tangent)
        return out

    def angle(self, s: float) -> float:
        p = self._params
        return float(p[Param.ANGLE] + s * (p[Param.CURVATURE] + 0.5 * s * p[Param.DCURVATURE]))

    def curvature(self, s: float) -> float:
        p = self._params
        return float(p[Param.CURVATURE] + s * p[Param.DCURVATURE])

    def project(self, point: Sequence[float]) -> float:
        raise NotImplementedError("Projection onto a clothoid segment is not supported")

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def trim(self, s_from: float, s_to: float) -> None:
        """Restrict the segment to arc lengths ``[s_from, s_to]`` of the current one."""
        # All three must be read before any parameter is overwritten.
        new_start = self.pos(s_from)
        new_angle = self.angle(s_from)
        new_curvature = self.curvature(s_from)

        self._params[Param.X], self._params[Param.Y] = new_start
        self._params[Param.ANGLE] = normalize_angle(new_angle)
        self._params[Param.CURVATURE] = new_curvature
        self._params[Param.LENGTH] = s_to - s_from
        log.debug("Trimmed clothoid to [%g, %g]", s_from, s_to)
        self._params_changed()

    def flip(self) -> None:
        """Reverse the direction of travel in place.

        Only the start point, angle and curvature are rewritten; length and
        curvature rate keep their stored values.
        """
        new_start = self.end_pos()
        new_angle = math.pi + self.end_angle()
        new_curvature = -self.end_curvature()

        self._params[Param.X], self._params[Param.Y] = new_start
        self._params[Param.ANGLE] = normalize_angle(new_angle)
        self._params[Param.CURVATURE] = new_curvature
        log.debug("Flipped clothoid")
        self._params_changed()

    # ------------------------------------------------------------------
    # Fitting support
    # ------------------------------------------------------------------

    def derivative_at(self, s: float) -> np.ndarray:
        """Jacobian of ``pos(s)`` with respect to the six parameters.

        Rows follow :class:`Param`, columns are ``x`` and ``y``.  The
        ``LENGTH`` row is always zero since ``s`` is an independent query
        parameter.
        """
        out = np.zeros((NUM_PARAMS, 2))
        out[Param.X, 0] = 1.0
        out[Param.Y, 1] = 1.0

        diff = self.pos(s) - self.start_pos()
        out[Param.ANGLE] = perp(diff)

        out[[Param.CURVATURE, Param.DCURVATURE]] = self._regime.curvature_jacobian(self._params, s)
        return out
