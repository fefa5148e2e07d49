"""
Radial Model Table Module.

This module provides the ModelTable class for representing a one-dimensional
radial earth model as an ordered table of knots. Each knot holds a depth and the
P-wave velocity, S-wave velocity and density at that depth. Depths are
non-decreasing; a first-order discontinuity (Moho, 660 km, core-mantle boundary,
...) is encoded by two consecutive knots sharing the same depth, the first
holding the values on the shallow side and the second those on the deep side.

Also included are the operations producing derived tables:

- full_table returns the canonical IASP91 table.
- remove_crust strips the crustal knots and extends the mantle to the surface.
- resolve evaluates a table at arbitrary depths, choosing a side at discontinuities.
- clip restricts a table to a depth window, interpolating the window edges.

All operations are pure; derived tables are new instances backed by read-only
arrays, so the canonical table can be shared freely.

IASP91 reference:
    Kennett & Engdahl 1991, Traveltimes for global earthquake location and
    phase identification, Geophys. J. Int. 105, pp. 429-465

"""

import logging
from collections.abc import Iterator, Sequence
from logging import Logger
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

from radial_earth.constants import (
    EARTH_RADIUS,
    SURFACE_DEPTH,
    TABLE_COLUMNS,
    Property,
)
from radial_earth.exceptions import DomainError, OptionTypeError
from radial_earth.interpolate import interpolate_brackets

module_logger = logging.getLogger("radial_earth.model_table")

# depth (km), vp (km/s), vs (km/s), rho (g/cm^3)
IASP91_KNOTS = np.array(
    [
        [0.000, 5.8000, 3.3600, 2.7200],
        [20.000, 5.8000, 3.3600, 2.7200],
        [20.000, 6.5000, 3.7500, 2.9200],
        [35.000, 6.5000, 3.7500, 2.9200],
        [35.000, 8.0400, 4.4700, 3.3198],
        [77.500, 8.0450, 4.4850, 3.3455],
        [120.000, 8.0500, 4.5000, 3.3713],
        [165.000, 8.1750, 4.5090, 3.3985],
        [210.000, 8.3000, 4.5180, 3.4258],
        [210.000, 8.3000, 4.5220, 3.4258],
        [260.000, 8.4825, 4.6090, 3.4561],
        [310.000, 8.6650, 4.6960, 3.4864],
        [360.000, 8.8475, 4.7830, 3.5167],
        [410.000, 9.0300, 4.8700, 3.5470],
        [410.000, 9.3600, 5.0700, 3.7557],
        [460.000, 9.5280, 5.1760, 3.8175],
        [510.000, 9.6960, 5.2820, 3.8793],
        [560.000, 9.8640, 5.3880, 3.9410],
        [610.000, 10.0320, 5.4940, 4.0028],
        [660.000, 10.2000, 5.6000, 4.0646],
        [660.000, 10.7900, 5.9500, 4.3714],
        [710.000, 10.9229, 6.0797, 4.4010],
        [760.000, 11.0558, 6.2095, 4.4305],
        [809.500, 11.1440, 6.2474, 4.4596],
        [859.000, 11.2300, 6.2841, 4.4885],
        [908.500, 11.3140, 6.3199, 4.5173],
        [958.000, 11.3960, 6.3546, 4.5459],
        [1007.500, 11.4761, 6.3883, 4.5744],
        [1057.000, 11.5543, 6.4211, 4.6028],
        [1106.500, 11.6308, 6.4530, 4.6310],
        [1156.000, 11.7056, 6.4841, 4.6591],
        [1205.500, 11.7787, 6.5143, 4.6870],
        [1255.000, 11.8504, 6.5438, 4.7148],
        [1304.500, 11.9205, 6.5725, 4.7424],
        [1354.000, 11.9893, 6.6006, 4.7699],
        [1403.500, 12.0568, 6.6280, 4.7973],
        [1453.000, 12.1231, 6.6547, 4.8245],
        [1502.500, 12.1881, 6.6809, 4.8515],
        [1552.000, 12.2521, 6.7066, 4.8785],
        [1601.500, 12.3151, 6.7317, 4.9052],
        [1651.000, 12.3772, 6.7564, 4.9319],
        [1700.500, 12.4383, 6.7807, 4.9584],
        [1750.000, 12.4987, 6.8046, 4.9847],
        [1799.500, 12.5584, 6.8282, 5.0109],
        [1849.000, 12.6174, 6.8514, 5.0370],
        [1898.500, 12.6759, 6.8745, 5.0629],
        [1948.000, 12.7339, 6.8972, 5.0887],
        [1997.500, 12.7915, 6.9199, 5.1143],
        [2047.000, 12.8487, 6.9423, 5.1398],
        [2096.500, 12.9057, 6.9647, 5.1652],
        [2146.000, 12.9625, 6.9870, 5.1904],
        [2195.500, 13.0192, 7.0093, 5.2154],
        [2245.000, 13.0758, 7.0316, 5.2403],
        [2294.500, 13.1325, 7.0540, 5.2651],
        [2344.000, 13.1892, 7.0765, 5.2898],
        [2393.500, 13.2462, 7.0991, 5.3142],
        [2443.000, 13.3034, 7.1218, 5.3386],
        [2492.500, 13.3610, 7.1449, 5.3628],
        [2542.000, 13.4190, 7.1681, 5.3869],
        [2591.500, 13.4774, 7.1917, 5.4108],
        [2641.000, 13.5364, 7.2156, 5.4345],
        [2690.500, 13.5961, 7.2398, 5.4582],
        [2740.000, 13.6564, 7.2645, 5.4817],
        [2740.000, 13.6564, 7.2645, 5.4817],
        [2789.670, 13.6679, 7.2768, 5.5051],
        [2839.330, 13.6793, 7.2892, 5.5284],
        [2889.000, 13.6908, 7.3015, 5.5515],
        [2889.000, 8.0088, 0.0000, 9.9145],
        [2939.330, 8.0963, 0.0000, 9.9942],
        [2989.660, 8.1821, 0.0000, 10.0722],
        [3039.990, 8.2662, 0.0000, 10.1485],
        [3090.320, 8.3486, 0.0000, 10.2233],
        [3140.660, 8.4293, 0.0000, 10.2964],
        [3190.990, 8.5083, 0.0000, 10.3679],
        [3241.320, 8.5856, 0.0000, 10.4378],
        [3291.650, 8.6611, 0.0000, 10.5062],
        [3341.980, 8.7350, 0.0000, 10.5731],
        [3392.310, 8.8072, 0.0000, 10.6385],
        [3442.640, 8.8776, 0.0000, 10.7023],
        [3492.970, 8.9464, 0.0000, 10.7647],
        [3543.300, 9.0134, 0.0000, 10.8257],
        [3593.640, 9.0787, 0.0000, 10.8852],
        [3643.970, 9.1424, 0.0000, 10.9434],
        [3694.300, 9.2043, 0.0000, 11.0001],
        [3744.630, 9.2645, 0.0000, 11.0555],
        [3794.960, 9.3230, 0.0000, 11.1095],
        [3845.290, 9.3798, 0.0000, 11.1623],
        [3895.620, 9.4349, 0.0000, 11.2137],
        [3945.950, 9.4883, 0.0000, 11.2639],
        [3996.280, 9.5400, 0.0000, 11.3127],
        [4046.620, 9.5900, 0.0000, 11.3604],
        [4096.950, 9.6383, 0.0000, 11.4069],
        [4147.280, 9.6848, 0.0000, 11.4521],
        [4197.610, 9.7297, 0.0000, 11.4962],
        [4247.940, 9.7728, 0.0000, 11.5391],
        [4298.270, 9.8143, 0.0000, 11.5809],
        [4348.600, 9.8540, 0.0000, 11.6216],
        [4398.930, 9.8920, 0.0000, 11.6612],
        [4449.260, 9.9284, 0.0000, 11.6998],
        [4499.600, 9.9630, 0.0000, 11.7373],
        [4549.930, 9.9959, 0.0000, 11.7737],
        [4600.260, 10.0271, 0.0000, 11.8092],
        [4650.590, 10.0566, 0.0000, 11.8437],
        [4700.920, 10.0844, 0.0000, 11.8772],
        [4751.250, 10.1105, 0.0000, 11.9098],
        [4801.580, 10.1349, 0.0000, 11.9414],
        [4851.910, 10.1576, 0.0000, 11.9722],
        [4902.240, 10.1785, 0.0000, 12.0021],
        [4952.580, 10.1978, 0.0000, 12.0311],
        [5002.910, 10.2154, 0.0000, 12.0593],
        [5053.240, 10.2312, 0.0000, 12.0867],
        [5103.570, 10.2454, 0.0000, 12.1133],
        [5153.900, 10.2578, 0.0000, 12.1391],
        [5153.900, 11.0914, 3.4385, 12.7037],
        [5204.610, 11.1036, 3.4488, 12.7289],
        [5255.320, 11.1153, 3.4587, 12.7530],
        [5306.040, 11.1265, 3.4681, 12.7760],
        [5356.750, 11.1371, 3.4770, 12.7980],
        [5407.460, 11.1472, 3.4856, 12.8188],
        [5458.170, 11.1568, 3.4937, 12.8387],
        [5508.890, 11.1659, 3.5013, 12.8574],
        [5559.600, 11.1745, 3.5085, 12.8751],
        [5610.310, 11.1825, 3.5153, 12.8917],
        [5661.020, 11.1901, 3.5217, 12.9072],
        [5711.740, 11.1971, 3.5276, 12.9217],
        [5762.450, 11.2036, 3.5330, 12.9351],
        [5813.160, 11.2095, 3.5381, 12.9474],
        [5863.870, 11.2150, 3.5427, 12.9586],
        [5914.590, 11.2199, 3.5468, 12.9688],
        [5965.300, 11.2243, 3.5505, 12.9779],
        [6016.010, 11.2282, 3.5538, 12.9859],
        [6066.720, 11.2316, 3.5567, 12.9929],
        [6117.440, 11.2345, 3.5591, 12.9988],
        [6168.150, 11.2368, 3.5610, 13.0036],
        [6218.860, 11.2386, 3.5626, 13.0074],
        [6269.570, 11.2399, 3.5637, 13.0100],
        [6320.290, 11.2407, 3.5643, 13.0117],
        [6371.000, 11.2409, 3.5645, 13.0122],
    ]
)
IASP91_KNOTS.flags.writeable = False

# Uppermost mantle trend extrapolated to the surface, used when the crust is removed
MANTLE_SURFACE_KNOT = (0.0, 8.0359, 4.4576, 3.2986)
N_CRUST_KNOTS = 3  # knots between the surface and the Moho deep side


class Knot(NamedTuple):
    """A single depth sample of a radial model."""

    depth: float
    vp: float
    vs: float
    rho: float


class ModelTable:
    """
    Class representing a one-dimensional radial model as an ordered table of knots.

    The table stores arrays of depth, P-wave velocity, S-wave velocity and density.
    Two consecutive knots sharing a depth mark a discontinuity. All arrays are
    read-only; operations on a table return new tables.

    Parameters
    ----------
    depth : array-like
        Knot depths (km).
    properties : array-like
        Knot properties with shape (n_knots, 3), columns vp, vs, rho.
    validate : bool, optional
        Whether to check the knot ordering invariants, default True. Tables
        produced by evaluating arbitrary query depths skip the check since their
        depths follow the query order.

    Attributes
    ----------
    depth : np.ndarray
        Depths (km).
    properties : np.ndarray
        Property matrix, columns indexed by Property.
    vp : np.ndarray
        P-wave velocities (km/s).
    vs : np.ndarray
        S-wave velocities (km/s).
    rho : np.ndarray
        Densities (g/cm^3).
    n_depth : int
        Number of knots.

    Raises
    ------
    ValueError
        If the shapes do not match, or validation is requested and the depths are
        not non-decreasing, appear more than twice, lie outside [0, 6371] km, or
        any property is negative.
    """

    def __init__(self, depth: np.ndarray, properties: np.ndarray, validate: bool = True):
        depth = np.array(depth, dtype=float)
        properties = np.array(properties, dtype=float)
        if properties.size == 0:
            properties = properties.reshape(0, 3)

        if depth.ndim != 1 or properties.shape != (len(depth), 3):
            raise ValueError(
                f"Expected {len(depth)} depths and a ({len(depth)}, 3) property matrix, "
                f"got shapes {depth.shape} and {properties.shape}."
            )

        if validate:
            _check_table_invariants(depth, properties)

        depth.flags.writeable = False
        properties.flags.writeable = False

        self.depth = depth
        self.properties = properties
        self.vp = properties[:, Property.vp.value]
        self.vs = properties[:, Property.vs.value]
        self.rho = properties[:, Property.rho.value]
        self.n_depth = len(depth)

    @classmethod
    def from_knots(cls, knots: Sequence[Sequence[float]]) -> "ModelTable":
        """
        Build a table from rows of (depth, vp, vs, rho).

        Parameters
        ----------
        knots : sequence of sequences
            Rows of depth, vp, vs and rho.

        Returns
        -------
        ModelTable
            The validated table.
        """
        rows = np.array(knots, dtype=float).reshape(-1, 4)
        return cls(rows[:, 0], rows[:, 1:])

    @classmethod
    def concatenate(cls, tables: Sequence["ModelTable"]) -> "ModelTable":
        """
        Join tables end to end, validating the result.

        Parameters
        ----------
        tables : sequence of ModelTable
            Tables in depth order.

        Returns
        -------
        ModelTable
            The joined table.
        """
        return cls(
            np.concatenate([table.depth for table in tables]),
            np.concatenate([table.properties for table in tables]),
        )

    def __len__(self) -> int:
        return self.n_depth

    def __iter__(self) -> Iterator[Knot]:
        for i in range(self.n_depth):
            yield self[i]

    def __getitem__(self, index: int) -> Knot:
        vp, vs, rho = self.properties[index]
        return Knot(float(self.depth[index]), float(vp), float(vs), float(rho))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelTable):
            return NotImplemented
        return np.array_equal(self.depth, other.depth) and np.array_equal(
            self.properties, other.properties
        )

    __hash__ = None

    def __repr__(self) -> str:
        if self.n_depth == 0:
            return "ModelTable(n_depth=0)"
        return (
            f"ModelTable(n_depth={self.n_depth}, "
            f"depth=[{self.depth[0]:g}, ..., {self.depth[-1]:g}] km)"
        )

    @property
    def is_sorted(self) -> bool:
        """True when depths are non-decreasing."""
        return bool(np.all(np.diff(self.depth) >= 0))

    def is_discontinuity(self, index: int) -> bool:
        """
        Check whether a knot is one side of a discontinuity.

        Parameters
        ----------
        index : int
            Knot index.

        Returns
        -------
        bool
            True if the neighbouring knot above or below shares its depth.
        """
        index = range(self.n_depth)[index]
        depth = self.depth[index]
        above = index > 0 and self.depth[index - 1] == depth
        below = index < self.n_depth - 1 and self.depth[index + 1] == depth
        return bool(above or below)

    def discontinuities(self) -> np.ndarray:
        """
        Depths at which the table holds a discontinuity.

        Returns
        -------
        np.ndarray
            Discontinuity depths (km), in table order.
        """
        repeated = self.depth[1:] == self.depth[:-1]
        return self.depth[1:][repeated]

    def take(self, indices: Sequence[int] | np.ndarray) -> "ModelTable":
        """
        Select knots by index, in the order given.

        Parameters
        ----------
        indices : sequence of int
            Knot indices.

        Returns
        -------
        ModelTable
            Table of the selected knots.
        """
        indices = np.asarray(indices, dtype=int)
        return ModelTable(self.depth[indices], self.properties[indices], validate=False)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the table to a DataFrame with columns depth, vp, vs and rho.

        Returns
        -------
        pd.DataFrame
            One row per knot.
        """
        return pd.DataFrame(
            np.column_stack((self.depth, self.properties)), columns=TABLE_COLUMNS
        )


def _check_table_invariants(depth: np.ndarray, properties: np.ndarray) -> None:
    """Raise ValueError if the knots break the table ordering rules."""
    if not np.all(np.isfinite(depth)) or not np.all(np.isfinite(properties)):
        raise ValueError("Model table may not contain NaN or infinite values.")
    if np.any(depth < SURFACE_DEPTH) or np.any(depth > EARTH_RADIUS):
        raise ValueError(
            f"Model table depths must lie within [{SURFACE_DEPTH:g}, {EARTH_RADIUS:g}] km."
        )
    if np.any(np.diff(depth) < 0):
        raise ValueError("Model table depths must be non-decreasing.")
    if len(depth) > 2 and np.any((depth[2:] == depth[1:-1]) & (depth[1:-1] == depth[:-2])):
        raise ValueError("A depth may appear at most twice in a model table.")
    if np.any(properties < 0):
        raise ValueError("Model table may not contain negative numbers.")


_FULL_TABLE = ModelTable(IASP91_KNOTS[:, 0], IASP91_KNOTS[:, 1:])


def full_table() -> ModelTable:
    """
    Return the canonical IASP91 table, including the crust.

    Returns
    -------
    ModelTable
        The shared, read-only IASP91 table.
    """
    return _FULL_TABLE


def remove_crust(table: ModelTable, logger: Optional[Logger] = None) -> ModelTable:
    """
    Strip the crust from a full IASP91 table.

    The knots between the surface and the Moho (both sides of 20 km and the
    shallow side of 35 km) are dropped and the surface knot is replaced by the
    uppermost mantle trend extrapolated to zero depth.

    Parameters
    ----------
    table : ModelTable
        A table with the canonical IASP91 crust at its top.
    logger : Logger, optional
        Logger instance for logging messages.

    Returns
    -------
    ModelTable
        The crustless table. The input is left untouched.
    """
    if logger is None:
        logger = module_logger

    surface = np.asarray(MANTLE_SURFACE_KNOT)
    mantle_start = N_CRUST_KNOTS + 1
    crustless = ModelTable(
        np.concatenate(([surface[0]], table.depth[mantle_start:])),
        np.vstack((surface[1:], table.properties[mantle_start:])),
    )
    logger.log(
        logging.DEBUG,
        f"Removed {N_CRUST_KNOTS} crustal knots, mantle extended to the surface",
    )
    return crustless


def check_flag(value: object, name: str, logger: Optional[Logger] = None) -> bool:
    """
    Check that an option value is a boolean.

    Parameters
    ----------
    value : object
        Value to check.
    name : str
        Option name, used in the error message.
    logger : Logger, optional
        Logger instance for logging messages.

    Returns
    -------
    bool
        The value as a Python bool.

    Raises
    ------
    OptionTypeError
        If the value is not a bool.
    """
    if logger is None:
        logger = module_logger
    if not isinstance(value, (bool, np.bool_)):
        error_msg = f"{name} must be True or False, got {value!r}"
        logger.log(logging.ERROR, error_msg)
        raise OptionTypeError(error_msg)
    return bool(value)


def as_depth_array(values: object, name: str, logger: Optional[Logger] = None) -> np.ndarray:
    """
    Convert a scalar or 1-D sequence of real numbers to a float array.

    Parameters
    ----------
    values : object
        Depth value(s) in km.
    name : str
        Option name, used in the error message.
    logger : Logger, optional
        Logger instance for logging messages.

    Returns
    -------
    np.ndarray
        1-D float array of depths.

    Raises
    ------
    OptionTypeError
        If the values are not real numbers or are nested deeper than one level.
    """
    if logger is None:
        logger = module_logger
    try:
        array = np.asarray(values)
    except (TypeError, ValueError):
        array = None

    if array is None or array.dtype.kind not in "iuf" or array.ndim > 1:
        error_msg = f"{name} must be a real number or a 1-D sequence of real numbers, got {values!r}"
        logger.log(logging.ERROR, error_msg)
        raise OptionTypeError(error_msg)
    return np.atleast_1d(array.astype(float))


def check_sorted(table: ModelTable, logger: Optional[Logger] = None) -> None:
    """
    Check that a table is depth sorted before looking depths up in it.

    Tables evaluated at query depths keep the query order and cannot be searched.

    Parameters
    ----------
    table : ModelTable
        Table the depths will be looked up in.
    logger : Logger, optional
        Logger instance for logging messages.

    Raises
    ------
    ValueError
        If the table depths are not non-decreasing.
    """
    if logger is None:
        logger = module_logger
    if not table.is_sorted:
        error_msg = (
            "Model table depths must be non-decreasing to look up depths in it, "
            f"got {table.depth.tolist()}"
        )
        logger.log(logging.ERROR, error_msg)
        raise ValueError(error_msg)


def check_depth_domain(
    depths: np.ndarray, name: str, table: ModelTable, logger: Optional[Logger] = None
) -> None:
    """
    Check that depths fall within [0, 6371] km and within the depths covered by a table.

    Parameters
    ----------
    depths : np.ndarray
        Depths (km) to check.
    name : str
        Option name, used in the error message.
    table : ModelTable
        Table the depths will be looked up in.
    logger : Logger, optional
        Logger instance for logging messages.

    Raises
    ------
    DomainError
        If any depth is out of range or not finite.
    """
    if logger is None:
        logger = module_logger
    if table.n_depth == 0:
        error_msg = f"Cannot look up {name} in an empty model table"
        logger.log(logging.ERROR, error_msg)
        raise DomainError(error_msg)

    top = max(SURFACE_DEPTH, float(table.depth.min()))
    bottom = min(EARTH_RADIUS, float(table.depth.max()))
    # written so that NaN fails the check
    outside = ~((depths >= top) & (depths <= bottom))
    if np.any(outside):
        error_msg = (
            f"{name} must be real-valued km depths within the range "
            f"[{top:g}, {bottom:g}], got {depths[outside].tolist()}"
        )
        logger.log(logging.ERROR, error_msg)
        raise DomainError(error_msg)


def resolve(
    table: ModelTable,
    depths: Sequence[float] | np.ndarray | float,
    dcbelow: bool = True,
    logger: Optional[Logger] = None,
) -> ModelTable:
    """
    Evaluate a table at arbitrary depths.

    Depths strictly between knots are linearly interpolated. A depth that
    matches a single knot returns that knot unchanged. A depth that matches a
    discontinuity returns the deep-side knot when dcbelow is True, and the
    shallow-side knot otherwise.

    Parameters
    ----------
    table : ModelTable
        Table to evaluate.
    depths : float or sequence of float
        Query depths (km), in any order and possibly repeated.
    dcbelow : bool, optional
        Side of a discontinuity to return, default True (deep side).
    logger : Logger, optional
        Logger instance for logging messages.

    Returns
    -------
    ModelTable
        One knot per query depth, in query order.

    Raises
    ------
    OptionTypeError
        If depths are not real numbers or dcbelow is not a bool.
    DomainError
        If any depth lies outside [0, 6371] km or outside the table.
    ValueError
        If the table is not depth sorted.
    """
    if logger is None:
        logger = module_logger
    dcbelow = check_flag(dcbelow, "dcbelow", logger)
    check_sorted(table, logger)
    query = as_depth_array(depths, "depths", logger)
    check_depth_domain(query, "depths", table, logger)

    lower = np.searchsorted(table.depth, query, side="left")
    upper = np.searchsorted(table.depth, query, side="right")
    # a query depth equal to one or two knot depths gives upper > lower
    exact = upper > lower
    chosen = upper - 1 if dcbelow else lower
    bracket_lower = np.where(exact, chosen, upper - 1)
    bracket_upper = np.where(exact, chosen, upper)

    properties = interpolate_brackets(
        table.depth, table.properties, bracket_lower, bracket_upper, query
    )
    logger.log(
        logging.DEBUG,
        f"Resolved {len(query)} depths ({int(exact.sum())} on knots, dcbelow={dcbelow})",
    )
    return ModelTable(query, properties, validate=False)


def clip(
    table: ModelTable,
    top: float,
    bottom: float,
    logger: Optional[Logger] = None,
) -> ModelTable:
    """
    Restrict a table to the depth window [top, bottom].

    Knots strictly inside the window are kept verbatim, including both sides of
    any discontinuity. A window edge that coincides with a knot depth keeps that
    knot; otherwise a knot is interpolated at the edge. At a discontinuity the
    top edge keeps the deep side and the bottom edge the shallow side.

    Parameters
    ----------
    table : ModelTable
        Table to clip. Must be depth sorted.
    top : float
        Shallow edge of the window (km).
    bottom : float
        Deep edge of the window (km). The edges are swapped if given reversed.
    logger : Logger, optional
        Logger instance for logging messages.

    Returns
    -------
    ModelTable
        The clipped table.

    Raises
    ------
    OptionTypeError
        If the edges are not real numbers.
    DomainError
        If either edge lies outside [0, 6371] km or outside the table.
    ValueError
        If the table is not depth sorted.
    """
    if logger is None:
        logger = module_logger
    check_sorted(table, logger)
    edges = as_depth_array([top, bottom], "range", logger)
    check_depth_domain(edges, "range", table, logger)
    top, bottom = np.sort(edges)
    depth = table.depth

    if top == bottom:
        on_knot = np.flatnonzero(depth == top)
        clipped = table.take(on_knot) if on_knot.size else resolve(table, [top], logger=logger)
        logger.log(logging.DEBUG, f"Clipped table to the single depth {top:g} km")
        return clipped

    idx1 = int(np.searchsorted(depth, top, side="right"))  # first knot deeper than top
    idx2 = int(np.searchsorted(depth, bottom, side="left")) - 1  # last knot shallower than bottom
    top_on_knot = bool(np.any(depth == top))
    bottom_on_knot = bool(np.any(depth == bottom))

    pieces = []
    if top_on_knot:
        idx1 -= 1
    else:
        pieces.append(resolve(table, [top], logger=logger))
    if bottom_on_knot:
        idx2 += 1
    pieces.append(table.take(np.arange(idx1, idx2 + 1)))
    if not bottom_on_knot:
        pieces.append(resolve(table, [bottom], logger=logger))

    clipped = ModelTable.concatenate(pieces)
    logger.log(
        logging.DEBUG,
        f"Clipped table to [{top:g}, {bottom:g}] km: {clipped.n_depth} knots",
    )
    return clipped
