"""Top-level helpers for spiralcad."""

__all__ = [
    "Clothoid",
    "CurvePrimitive",
    "CurveSample",
    "Param",
    # Tolerance configuration
    "TolerancePolicy",
    "get_tolerance",
    "set_tolerance",
]

__version__ = "0.1.0"

from .geom import Clothoid, CurvePrimitive, CurveSample, Param
from .numeric import TolerancePolicy, get_tolerance, set_tolerance
