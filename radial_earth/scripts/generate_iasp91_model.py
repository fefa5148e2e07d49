"""
generate_iasp91_model.py

This script writes the IASP91 radial Earth model to a file, either as the knot
table restricted to a depth window or evaluated at custom depth points.

Usage:
    python generate_iasp91_model.py <output_path> [options]

Example:
    python generate_iasp91_model.py iasp91_cmb.nd --top 2600 --bottom 3400
    python generate_iasp91_model.py iasp91_crustless.tvel --no-crust
    python generate_iasp91_model.py profile.csv --depths-file depths.txt --dcabove

The output format is chosen from the file extension:
    .csv   comma separated depth, vp, vs, rho with a header row
    .nd    TauP named discontinuities format
    .tvel  TauP tvel format

If the --depths-file option is provided, it should point to a text file with depth points in kilometres, one per line, such as:
        0.0
        35.0
        100.0
        2889.0
In this case the model is evaluated at those depths (in the order given), --top and --bottom are ignored,
and --dcbelow/--dcabove selects the side returned at a discontinuity. Only the .csv format accepts
custom depths, as the TauP formats require depth sorted knots.

"""

import logging
import sys
import time
from pathlib import Path
from typing import Annotated

import numpy as np
import typer

from radial_earth.constants import (
    DEFAULT_RANGE,
    LOG_FORMAT,
    MODEL_NAME,
    WriteFormat,
)
from radial_earth.iasp91 import ModelOptions, get_model
from radial_earth.model_table import check_depth_domain, full_table
from radial_earth.write import csv, taup

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("radial_earth")

app = typer.Typer(pretty_exceptions_enable=False)

WRITERS = {
    WriteFormat.CSV: csv.write_model,
    WriteFormat.ND: taup.write_nd,
    WriteFormat.TVEL: taup.write_tvel,
}


def read_depth_points_text_file(file_path: Path, logger: logging.Logger) -> list[float]:
    """
    Read the depths (km) at which to evaluate the model, one per line.

    Depths are checked against the model's depth span here, so that a bad file
    is reported by name before any model is built.

    Parameters
    ----------
    file_path : Path
        Text file of depth points.
    logger : logging.Logger
        Logger instance for logging messages.

    Returns
    -------
    list[float]
        Depths in file order.

    Raises
    ------
    OSError
        If the file cannot be read.
    ValueError
        If the file holds no depths or a line is not a number.
    DomainError
        If a depth lies outside [0, 6371] km.
    """
    try:
        depths = np.loadtxt(file_path, dtype=float, ndmin=1)
    except (OSError, ValueError) as e:
        logger.log(logging.ERROR, f"Failed to read depth points file {file_path}: {e}")
        raise
    if depths.size == 0:
        error_msg = f"No depth points found in {file_path}"
        logger.log(logging.ERROR, error_msg)
        raise ValueError(error_msg)

    check_depth_domain(depths, f"depths in {file_path.name}", full_table(), logger)
    logger.log(logging.DEBUG, f"Read {depths.size} depth points from {file_path}")
    return depths.tolist()


@app.command()
def generate_iasp91_model(
    output_path: Annotated[
        Path,
        typer.Argument(
            dir_okay=False,
        ),
    ],
    top: float = DEFAULT_RANGE[0],
    bottom: float = DEFAULT_RANGE[1],
    crust: bool = True,
    dcbelow: Annotated[bool, typer.Option("--dcbelow/--dcabove")] = True,
    depths_file: Annotated[
        Path | None,
        typer.Option(
            "--depths-file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    log_level: str = "INFO",
) -> None:
    """
    Write the IASP91 model to a .csv, .nd or .tvel file.

    Parameters
    ----------
    output_path : Path
        Path of the output file; its extension selects the format.
    top : float, optional
        Shallow edge (km) of the depth window written, default 0.
    bottom : float, optional
        Deep edge (km) of the depth window written, default 6371.
    crust : bool, optional
        Keep the crust (default) or extend the mantle to the surface.
    dcbelow : bool, optional
        Side of a discontinuity returned for custom depths, default the deep side.
    depths_file : Path | None, optional
        Path to a text file of depth points (km) at which to evaluate the model.
    log_level : str, optional
        Logging level for the script (default: "INFO").

    Raises
    ------
    ValueError
        If the output extension is not supported, or custom depths are requested
        for a TauP format.
    """
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    start_time = time.time()

    write_format = WriteFormat.from_suffix(output_path.suffix.lower())

    depth_values = None
    if depths_file is not None:
        if write_format != WriteFormat.CSV:
            error_msg = f"Custom depths can only be written to .csv, not {output_path.suffix}"
            logger.log(logging.ERROR, error_msg)
            raise ValueError(error_msg)
        depth_values = read_depth_points_text_file(depths_file, logger)

    options = ModelOptions(
        depths=depth_values, dcbelow=dcbelow, crust=crust, range=(top, bottom)
    )
    model = get_model(options, logger=logger)
    WRITERS[write_format](model, output_path, logger)

    elapsed_time = time.time() - start_time
    logger.log(
        logging.INFO,
        f"{MODEL_NAME} ({write_format.name}) written to {output_path} in {elapsed_time:.2f} seconds",
    )


if __name__ == "__main__":
    app()
