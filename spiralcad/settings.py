# spiralcad global settings

# Regime thresholds for clothoid segments
ARC_EPSILON = 1e-12   # |dcurvature| below this is treated as constant curvature
FLAT_EPSILON = 1e-6   # |curvature| below this (with constant curvature) is a straight line

# Default number of points produced by CurvePrimitive.sample()
DEFAULT_SAMPLES = 64
