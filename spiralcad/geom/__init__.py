"""Geometry primitives for spiralcad."""

from .clothoid import Clothoid
from .curve import NUM_PARAMS, CurvePrimitive, CurveSample, Param
from .fresnel import fresnel
from .regimes import ArcRegime, ClothoidRegime, FlatRegime, Regime, select_regime

__all__ = [
    "Clothoid",
    "CurvePrimitive",
    "CurveSample",
    "Param",
    "NUM_PARAMS",
    "fresnel",
    "Regime",
    "FlatRegime",
    "ArcRegime",
    "ClothoidRegime",
    "select_regime",
]
