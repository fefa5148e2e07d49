from pathlib import Path

import pytest

from radial_earth.model_table import ModelTable, full_table, remove_crust


@pytest.fixture(scope="session")
def iasp91_table() -> ModelTable:
    """The canonical IASP91 table."""
    return full_table()


@pytest.fixture(scope="session")
def crustless_table(iasp91_table: ModelTable) -> ModelTable:
    """The IASP91 table with the crust removed."""
    return remove_crust(iasp91_table)


@pytest.fixture
def depth_points_file(tmp_path: Path) -> Path:
    """A text file of depth points, one per line, deliberately unsorted."""
    path = tmp_path / "depths.txt"
    path.write_text("100.0\n35.0\n0.0\n2889.0\n")
    return path
