"""
Interpolation functions for radial earth models.

"""

import numba
import numpy as np


@numba.jit(nopython=True)
def linear_interpolation_vectorized(
    x0: float, x1: float, y0: np.ndarray | float, y1: np.ndarray | float, x: float
) -> np.ndarray:
    """
    Perform linear interpolation using vectorized operations.

    Parameters
    ----------
    x0 : float
        First x coordinate.
    x1 : float
        Second x coordinate.
    y0 : np.ndarray or float
        First y coordinate(s).
    y1 : np.ndarray or float
        Second y coordinate(s).
    x : float
        The x value to interpolate at.

    Returns
    -------
    np.ndarray
        Interpolated y values corresponding to x.
    """
    return y0 + (y1 - y0) * (x - x0) / (x1 - x0)


@numba.jit(nopython=True)
def interpolate_brackets(
    depth: np.ndarray,
    properties: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    query: np.ndarray,
) -> np.ndarray:
    """
    Evaluate a knot table at query depths from precomputed bracket indices.

    Where ``lower[i] == upper[i]`` the knot at that index is copied unchanged,
    otherwise each property is linearly interpolated between the two knots.

    Parameters
    ----------
    depth : np.ndarray
        Knot depths (km), non-decreasing.
    properties : np.ndarray
        Knot properties, shape (n_knots, n_properties).
    lower : np.ndarray
        Index of the shallow bracketing knot for each query depth.
    upper : np.ndarray
        Index of the deep bracketing knot for each query depth.
    query : np.ndarray
        Query depths (km).

    Returns
    -------
    np.ndarray
        Properties at the query depths, shape (len(query), n_properties).
    """
    result = np.empty((query.shape[0], properties.shape[1]))
    for i in range(query.shape[0]):
        lo = lower[i]
        hi = upper[i]
        if lo == hi:
            result[i, :] = properties[lo, :]
        else:
            result[i, :] = linear_interpolation_vectorized(
                depth[lo], depth[hi], properties[lo, :], properties[hi, :], query[i]
            )
    return result
