"""Reference values shared by the test modules."""

import numpy as np

N_IASP91_KNOTS = 138

# depths (km) of the discontinuities in IASP91, shallow to deep
DISCONTINUITY_DEPTHS = [20.0, 35.0, 210.0, 410.0, 660.0, 2740.0, 2889.0, 5153.9]

MOHO_SHALLOW_SIDE = (6.5000, 3.7500, 2.9200)
MOHO_DEEP_SIDE = (8.0400, 4.4700, 3.3198)
MANTLE_SURFACE = (0.0, 8.0359, 4.4576, 3.2986)


def manual_interpolation(depth: np.ndarray, properties: np.ndarray, d: float) -> np.ndarray:
    """Linearly interpolate properties at d from the two nearest distinct knot depths."""
    upper = int(np.searchsorted(depth, d, side="right"))
    lower = upper - 1
    weight = (d - depth[lower]) / (depth[upper] - depth[lower])
    return properties[lower] + (properties[upper] - properties[lower]) * weight
