"""
IASP91 Earth Model Module.

This module is the entry point for building the 1-D radial Earth model IASP91.
ModelOptions collects the request (query depths, discontinuity side, crust and
depth window), validating every option once on construction. get_model turns a
request into a Model record holding the depth, P-wave velocity, S-wave velocity
and density arrays together with descriptive metadata.

Usage:
    model = get_model(range=(2600, 3400))  # core-mantle boundary region
    model = get_model(depths=[35], dcbelow=False)  # shallow side of the Moho
    model = get_model(ModelOptions(crust=False))

"""

import dataclasses
import logging
from dataclasses import dataclass, field
from logging import Logger
from typing import Optional

import numpy as np
import pandas as pd

from radial_earth.constants import DEFAULT_RANGE, MODEL_NAME, REFERENCE_PERIOD
from radial_earth.exceptions import InvalidOptionError, OptionTypeError
from radial_earth.model_table import (
    ModelTable,
    as_depth_array,
    check_depth_domain,
    check_flag,
    clip,
    full_table,
    remove_crust,
    resolve,
)

module_logger = logging.getLogger("radial_earth.iasp91")


@dataclass(frozen=True)
class ModelOptions:
    """
    Options controlling which part of IASP91 is returned.

    Parameters
    ----------
    depths : sequence of float, optional
        Depths (km) at which to evaluate the model. When given (and not empty)
        only these depths are returned, in the order given, and range is ignored.
    dcbelow : bool, optional
        Return the deep side (True, default) or shallow side (False) of a
        discontinuity when a requested depth falls exactly on one.
    crust : bool, optional
        Keep the crust (True, default). False replaces the crust by the mantle
        extended to the surface.
    range : tuple of float, optional
        (top, bottom) depth window (km) of knots returned when no depths are
        given, default (0, 6371). Reversed windows are sorted.

    Raises
    ------
    OptionTypeError
        If a value has the wrong type or shape.
    DomainError
        If a depth or range value is outside [0, 6371] km.
    """

    depths: Optional[tuple[float, ...]] = None
    dcbelow: bool = True
    crust: bool = True
    range: tuple[float, float] = DEFAULT_RANGE

    def __post_init__(self):
        table = full_table()

        depths = None
        if self.depths is not None:
            depth_array = as_depth_array(self.depths, "depths")
            check_depth_domain(depth_array, "depths", table)
            if depth_array.size:
                depths = tuple(depth_array.tolist())

        dcbelow = check_flag(self.dcbelow, "dcbelow")
        crust = check_flag(self.crust, "crust")

        edges = as_depth_array(self.range, "range")
        if edges.size != 2:
            error_msg = (
                f"range must be a 2 element sequence specifying (top, bottom) in km, "
                f"got {self.range!r}"
            )
            module_logger.log(logging.ERROR, error_msg)
            raise OptionTypeError(error_msg)
        check_depth_domain(edges, "range", table)

        object.__setattr__(self, "depths", depths)
        object.__setattr__(self, "dcbelow", dcbelow)
        object.__setattr__(self, "crust", crust)
        object.__setattr__(self, "range", tuple(sorted(edges.tolist())))


OPTION_NAMES = frozenset(option.name for option in dataclasses.fields(ModelOptions))


@dataclass(frozen=True, eq=False, kw_only=True)
class Model:
    """
    A radial Earth model instance.

    All depth-indexed arrays have equal length and are aligned by position.
    Depths are repeated at discontinuities unless the model was evaluated at
    requested depths.

    Attributes
    ----------
    name : str
        Model name.
    ocean : bool
        Whether the model has an ocean layer, always False.
    crust : bool
        Whether the crust is included.
    isotropic : bool
        Always True.
    refperiod : float
        Reference period (s) of the velocities.
    flattened : bool
        Whether an earth flattening transform has been applied, always False.
    depth : np.ndarray
        Depths (km).
    vp : np.ndarray
        P-wave velocities (km/s).
    vs : np.ndarray
        S-wave velocities (km/s).
    rho : np.ndarray
        Densities (g/cm^3).
    """

    name: str = MODEL_NAME
    ocean: bool = False
    crust: bool = True
    isotropic: bool = True
    refperiod: float = REFERENCE_PERIOD
    flattened: bool = False
    depth: np.ndarray = field(default_factory=lambda: np.empty(0))
    vp: np.ndarray = field(default_factory=lambda: np.empty(0))
    vs: np.ndarray = field(default_factory=lambda: np.empty(0))
    rho: np.ndarray = field(default_factory=lambda: np.empty(0))

    @classmethod
    def from_table(cls, table: ModelTable, crust: bool) -> "Model":
        """
        Wrap a model table in a Model record.

        Parameters
        ----------
        table : ModelTable
            The table to wrap.
        crust : bool
            Whether the table includes the crust.

        Returns
        -------
        Model
            The model record.
        """
        return cls(
            crust=crust,
            depth=table.depth,
            vp=table.vp,
            vs=table.vs,
            rho=table.rho,
        )

    def __len__(self) -> int:
        return len(self.depth)

    @property
    def table(self) -> ModelTable:
        """The model as a ModelTable, knots in the order stored."""
        return ModelTable(
            self.depth, np.column_stack((self.vp, self.vs, self.rho)), validate=False
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the model to a DataFrame with columns depth, vp, vs and rho.

        Returns
        -------
        pd.DataFrame
            One row per depth.
        """
        return self.table.to_dataframe()


def get_model_from_options(
    options: ModelOptions, logger: Optional[Logger] = None
) -> Model:
    """
    Build the IASP91 model described by a set of options.

    Parameters
    ----------
    options : ModelOptions
        Validated model options.
    logger : Logger, optional
        Logger instance for logging messages.

    Returns
    -------
    Model
        The requested model.
    """
    if logger is None:
        logger = module_logger

    table = full_table()
    if not options.crust:
        table = remove_crust(table, logger)

    if options.depths is not None:
        table = resolve(table, options.depths, options.dcbelow, logger)
        logger.log(
            logging.INFO,
            f"{MODEL_NAME} evaluated at {table.n_depth} depths (crust={options.crust})",
        )
    else:
        top, bottom = options.range
        table = clip(table, top, bottom, logger)
        logger.log(
            logging.INFO,
            f"{MODEL_NAME} clipped to [{top:g}, {bottom:g}] km: {table.n_depth} knots "
            f"(crust={options.crust})",
        )

    return Model.from_table(table, options.crust)


def get_model(
    options: Optional[ModelOptions] = None,
    *,
    logger: Optional[Logger] = None,
    **kwargs,
) -> Model:
    """
    Return the IASP91 Earth model.

    Options may be given as a ModelOptions instance, as keyword arguments, or
    both, in which case the keyword arguments override the instance fields.

    Parameters
    ----------
    options : ModelOptions, optional
        Base options, default ModelOptions().
    logger : Logger, optional
        Logger instance for logging messages.
    **kwargs
        Any of depths, dcbelow, crust and range (see ModelOptions).

    Returns
    -------
    Model
        The requested model.

    Raises
    ------
    InvalidOptionError
        If a keyword argument is not a known option.
    OptionTypeError
        If options is not a ModelOptions, or an option value has the wrong type.
    DomainError
        If a depth or range value is outside [0, 6371] km.
    """
    if logger is None:
        logger = module_logger

    unknown = sorted(set(kwargs) - OPTION_NAMES)
    if unknown:
        error_msg = (
            f"Unknown option(s): {', '.join(unknown)}. "
            f"Valid options are: {', '.join(sorted(OPTION_NAMES))}"
        )
        logger.log(logging.ERROR, error_msg)
        raise InvalidOptionError(error_msg)

    if options is None:
        options = ModelOptions(**kwargs)
    elif isinstance(options, ModelOptions):
        options = dataclasses.replace(options, **kwargs)
    else:
        error_msg = f"options must be a ModelOptions instance, got {type(options).__name__}"
        logger.log(logging.ERROR, error_msg)
        raise OptionTypeError(error_msg)

    return get_model_from_options(options, logger)

