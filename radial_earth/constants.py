"""
Constants for the radial earth model package.

"""

from enum import Enum, auto

EARTH_RADIUS = 6371.0  # km, centre of the Earth in depth coordinates
SURFACE_DEPTH = 0.0

MODEL_NAME = "IASP91"
REFERENCE_PERIOD = 1.0  # s

DEFAULT_RANGE = (SURFACE_DEPTH, EARTH_RADIUS)

# Named discontinuities labelled in TauP .nd files, depth (km) of each boundary
MOHO_DEPTH = 35.0
CMB_DEPTH = 2889.0
ICB_DEPTH = 5153.9
ND_BOUNDARY_LABELS = {
    MOHO_DEPTH: "mantle",
    CMB_DEPTH: "outer-core",
    ICB_DEPTH: "inner-core",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

TABLE_COLUMNS = ["depth", "vp", "vs", "rho"]


class Property(Enum):
    """
    Enum for the tabulated properties, valued by their column in the property matrix.

    0: P-wave velocity
    1: S-wave velocity
    2: Density
    """

    vp = 0
    vs = 1
    rho = 2


class WriteFormat(Enum):
    """
    Enum for the output file formats.

    CSV: comma separated depth, vp, vs, rho
    ND: TauP named discontinuity format
    TVEL: TauP tvel format
    """

    CSV = auto()
    ND = auto()
    TVEL = auto()

    @classmethod
    def from_suffix(cls, suffix: str) -> "WriteFormat":
        """
        Look up the write format matching a file suffix.

        Parameters
        ----------
        suffix : str
            File suffix including the leading dot, e.g. ".nd".

        Returns
        -------
        WriteFormat
            The matching format.

        Raises
        ------
        ValueError
            If the suffix does not correspond to a known format.
        """
        try:
            return cls[suffix.lstrip(".").upper()]
        except KeyError:
            raise ValueError(
                f"Unsupported file extension: {suffix}. "
                "Supported formats: .csv, .nd, .tvel"
            ) from None
