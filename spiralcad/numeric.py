"""Numeric tolerance configuration for curve primitives."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Optional

from . import settings

log = logging.getLogger("spiralcad.numeric")


@dataclass(frozen=True)
class TolerancePolicy:
    """Container for the thresholds that select a clothoid regime."""

    arc: float = settings.ARC_EPSILON  # on |dcurvature|
    flat: float = settings.FLAT_EPSILON  # on |curvature|

    def __post_init__(self) -> None:
        if self.arc <= 0.0 or self.flat <= 0.0:
            raise ValueError("Tolerances must be positive")


_policy_lock = RLock()
_current_policy: TolerancePolicy = TolerancePolicy()


def get_tolerance() -> TolerancePolicy:
    with _policy_lock:
        return _current_policy


def set_tolerance(policy: TolerancePolicy) -> TolerancePolicy:
    """Install ``policy`` globally and return the previous one.

    Existing segments keep their cached regime until their next
    recomputation.
    """

    global _current_policy
    with _policy_lock:
        previous = _current_policy
        _current_policy = policy
    log.info("Tolerance policy changed: arc=%g flat=%g", policy.arc, policy.flat)
    return previous


def nearly_equal(a: float, b: float, *, eps: Optional[float] = None) -> bool:
    tol = eps if eps is not None else get_tolerance().flat
    return abs(a - b) <= tol
