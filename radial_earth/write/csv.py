"""
Module for writing radial earth models to CSV format.

"""

import logging
from logging import Logger
from pathlib import Path
from typing import Optional

import numpy as np

from radial_earth.iasp91 import Model


def write_model(
    model: Model,
    output_path: Path,
    logger: Optional[Logger] = None,
) -> None:
    """
    Write a model to a CSV file using pandas.

    The file has a header row and the columns depth, vp, vs and rho, one row per
    depth of the model in the order stored.

    Parameters
    ----------
    model : Model
        The model to write.
    output_path : Path
        Path of the CSV file. Parent directories are created if needed.
    logger : Logger, optional
        Logger instance for logging messages.

    Raises
    ------
    ValueError
        If any velocity/density values are negative.
    OSError
        If file operations fail.
    """
    if logger is None:
        logger = logging.getLogger("radial_earth.write.csv")

    for name in ("vp", "vs", "rho"):
        values = getattr(model, name)
        if np.any(values < 0):
            error_msg = f"Negative values found in {name} data. Min value: {np.min(values)}"
            logger.log(logging.ERROR, error_msg)
            raise ValueError(error_msg)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        model.to_dataframe().to_csv(output_path, index=False)
    except OSError as e:
        logger.log(logging.ERROR, f"Error writing CSV data: {str(e)}")
        raise

    logger.log(logging.INFO, f"Wrote {len(model)} rows of {model.name} to {output_path}")
