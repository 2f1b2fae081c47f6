from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

import numpy as np

from .. import settings


class Param(IntEnum):
    """Index of each defining parameter in a curve's parameter vector."""

    X = 0
    Y = 1
    ANGLE = 2
    LENGTH = 3
    CURVATURE = 4
    DCURVATURE = 5


NUM_PARAMS = len(Param)


@dataclass
class CurveSample:
    """Outputs of :meth:`CurvePrimitive.eval`; unrequested fields stay ``None``."""

    pos: Optional[np.ndarray] = None
    der: Optional[np.ndarray] = None
    der2: Optional[np.ndarray] = None


class CurvePrimitive(ABC):
    """Abstract arc-length parametrized planar curve.

    Subclasses keep their defining parameters in ``self._params`` and must
    rebuild any cached state in :meth:`_params_changed`.
    """

    _params: np.ndarray

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def params(self) -> np.ndarray:
        return self._params.copy()

    def set_params(self, values: Sequence[float]) -> None:
        """Replace the whole parameter vector and recompute cached state."""
        v = np.asarray(values, dtype=float)
        if v.shape != (NUM_PARAMS,):
            raise ValueError(f"Expected {NUM_PARAMS} parameters, got shape {v.shape}")
        self._params = v.copy()
        self._params_changed()

    @property
    def length(self) -> float:
        return float(self._params[Param.LENGTH])

    def is_valid(self) -> bool:
        return bool(self._params[Param.LENGTH] >= 0.0)

    @abstractmethod
    def _params_changed(self) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    @abstractmethod
    def eval(self, s: float, pos: bool = True, der: bool = False, der2: bool = False) -> CurveSample:
        """Evaluate the curve at arc length ``s``."""
        raise NotImplementedError

    @abstractmethod
    def angle(self, s: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def curvature(self, s: float) -> float:
        raise NotImplementedError

    def pos(self, s: float) -> np.ndarray:
        return self.eval(s).pos

    def der(self, s: float) -> np.ndarray:
        return self.eval(s, pos=False, der=True).der

    def der2(self, s: float) -> np.ndarray:
        return self.eval(s, pos=False, der2=True).der2

    def start_pos(self) -> np.ndarray:
        return self._params[[Param.X, Param.Y]].copy()

    def end_pos(self) -> np.ndarray:
        return self.pos(self.length)

    def start_der(self) -> np.ndarray:
        return self.der(0.0)

    def end_der(self) -> np.ndarray:
        return self.der(self.length)

    def start_angle(self) -> float:
        return self.angle(0.0)

    def end_angle(self) -> float:
        return self.angle(self.length)

    def start_curvature(self) -> float:
        return self.curvature(0.0)

    def end_curvature(self) -> float:
        return self.curvature(self.length)

    def sample(self, n: int = settings.DEFAULT_SAMPLES) -> np.ndarray:
        """Return ``n`` positions evenly spaced in arc length as an ``(n, 2)`` array."""
        if n < 2:
            raise ValueError("sample() needs at least two points")
        return np.array([self.pos(s) for s in np.linspace(0.0, self.length, n)])

    # ------------------------------------------------------------------
    # Editing and fitting hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def project(self, point: Sequence[float]) -> float:
        raise NotImplementedError

    @abstractmethod
    def trim(self, s_from: float, s_to: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def flip(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def derivative_at(self, s: float) -> np.ndarray:
        """Jacobian of ``pos(s)`` with respect to the parameters, shape ``(NUM_PARAMS, 2)``."""
        raise NotImplementedError

    def clone(self) -> "CurvePrimitive":
        return copy.deepcopy(self)
