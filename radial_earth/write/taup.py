"""
Module for writing radial earth models in the TauP model file formats.

Two formats are supported:
1. ".nd" (named discontinuities): one "depth vp vs rho" row per knot, with the
   labels "mantle", "outer-core" and "inner-core" on their own line just above
   the deep side of the Moho, core-mantle and inner-core boundaries.
2. ".tvel": two header lines followed by one "depth vp vs rho" row per knot.

Both formats describe a model from the surface downwards, so only depth sorted
models (as returned when no query depths are given) can be written.

"""

import logging
from logging import Logger
from pathlib import Path
from typing import Optional

from radial_earth.constants import ND_BOUNDARY_LABELS
from radial_earth.iasp91 import Model
from radial_earth.model_table import Knot, ModelTable


def _format_knot(knot: Knot) -> str:
    return f"{knot.depth:9.3f} {knot.vp:8.4f} {knot.vs:8.4f} {knot.rho:8.4f}\n"


def _sorted_table(model: Model, logger: Logger) -> ModelTable:
    """Return the model table, raising ValueError if the depths are not sorted."""
    table = model.table
    if not table.is_sorted:
        error_msg = f"Depths of {model.name} must be non-decreasing to write a TauP model file."
        logger.log(logging.ERROR, error_msg)
        raise ValueError(error_msg)
    return table


def write_nd(model: Model, output_path: Path, logger: Optional[Logger] = None) -> None:
    """
    Write a model to a TauP named discontinuities (.nd) file.

    Parameters
    ----------
    model : Model
        The model to write. Depths must be sorted.
    output_path : Path
        Path of the output file. Parent directories are created if needed.
    logger : Logger, optional
        Logger instance for logging messages.

    Raises
    ------
    ValueError
        If the model depths are not sorted.
    """
    if logger is None:
        logger = logging.getLogger("radial_earth.write.taup")

    table = _sorted_table(model, logger)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w") as f:
        for i, knot in enumerate(table):
            label = ND_BOUNDARY_LABELS.get(knot.depth)
            # the label sits between the two knots of the discontinuity
            if label and i > 0 and table.depth[i - 1] == knot.depth:
                f.write(f"{label}\n")
            f.write(_format_knot(knot))

    logger.log(logging.INFO, f"Wrote {table.n_depth} knots of {model.name} to {output_path}")


def write_tvel(model: Model, output_path: Path, logger: Optional[Logger] = None) -> None:
    """
    Write a model to a TauP .tvel file.

    Parameters
    ----------
    model : Model
        The model to write. Depths must be sorted.
    output_path : Path
        Path of the output file. Parent directories are created if needed.
    logger : Logger, optional
        Logger instance for logging messages.

    Raises
    ------
    ValueError
        If the model depths are not sorted.
    """
    if logger is None:
        logger = logging.getLogger("radial_earth.write.taup")

    table = _sorted_table(model, logger)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w") as f:
        f.write(f"{model.name} P (crust={model.crust})\n")
        f.write(f"{model.name} S (crust={model.crust})\n")
        for knot in table:
            f.write(_format_knot(knot))

    logger.log(logging.INFO, f"Wrote {table.n_depth} knots of {model.name} to {output_path}")
