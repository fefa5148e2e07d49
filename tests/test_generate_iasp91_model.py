import logging
from pathlib import Path

import numpy as np
import pandas as pd
import pytest
from typer.testing import CliRunner

from radial_earth.exceptions import DomainError
from radial_earth.iasp91 import get_model
from radial_earth.scripts.generate_iasp91_model import (
    app,
    generate_iasp91_model,
    read_depth_points_text_file,
)

runner = CliRunner()


def test_read_depth_points(depth_points_file: Path):
    logger = logging.getLogger("test")
    assert read_depth_points_text_file(depth_points_file, logger) == [
        100.0,
        35.0,
        0.0,
        2889.0,
    ]


def test_read_depth_points_missing(tmp_path: Path):
    with pytest.raises(OSError):
        read_depth_points_text_file(tmp_path / "missing.txt", logging.getLogger("test"))


@pytest.mark.parametrize("contents", ["10.0\n-5.0\n", "100.0\n7000.0\n"])
def test_read_depth_points_outside_earth(tmp_path: Path, contents: str):
    file_path = tmp_path / "depths.txt"
    file_path.write_text(contents)
    with pytest.raises(DomainError, match="depths in depths.txt"):
        read_depth_points_text_file(file_path, logging.getLogger("test"))


def test_read_depth_points_empty(tmp_path: Path):
    file_path = tmp_path / "depths.txt"
    file_path.write_text("")
    with pytest.raises(ValueError, match="No depth points found"):
        read_depth_points_text_file(file_path, logging.getLogger("test"))


def test_generate_csv_window(tmp_path: Path):
    output_path = tmp_path / "cmb.csv"

    generate_iasp91_model(output_path, top=3400.0, bottom=2600.0)

    df = pd.read_csv(output_path)
    pd.testing.assert_frame_equal(df, get_model(range=(2600, 3400)).to_dataframe())


def test_generate_csv_custom_depths(tmp_path: Path, depth_points_file: Path):
    output_path = tmp_path / "profile.csv"

    generate_iasp91_model(output_path, dcbelow=False, depths_file=depth_points_file)

    df = pd.read_csv(output_path)
    assert df["depth"].tolist() == [100.0, 35.0, 0.0, 2889.0]
    assert df["vp"].tolist()[1] == 6.5
    assert df["vs"].tolist()[3] == 7.3015


def test_generate_nd_crustless(tmp_path: Path):
    output_path = tmp_path / "crustless.nd"

    generate_iasp91_model(output_path, crust=False)

    assert "mantle" not in output_path.read_text().splitlines()
    first = np.array(output_path.read_text().splitlines()[0].split(), dtype=float)
    np.testing.assert_allclose(first, [0.0, 8.0359, 4.4576, 3.2986])


def test_generate_unsupported_extension(tmp_path: Path):
    with pytest.raises(ValueError, match="Unsupported file extension"):
        generate_iasp91_model(tmp_path / "model.hdf5")


def test_generate_custom_depths_require_csv(tmp_path: Path, depth_points_file: Path):
    with pytest.raises(ValueError, match="only be written to .csv"):
        generate_iasp91_model(tmp_path / "model.nd", depths_file=depth_points_file)


def test_generate_out_of_range(tmp_path: Path):
    with pytest.raises(DomainError):
        generate_iasp91_model(tmp_path / "model.csv", top=-10.0)


def test_cli(tmp_path: Path):
    output_path = tmp_path / "iasp91.tvel"

    result = runner.invoke(app, [str(output_path), "--no-crust", "--bottom", "700"])

    assert result.exit_code == 0, result.output
    rows = np.loadtxt(output_path, skiprows=2)
    assert rows[0, 1] == 8.0359
    assert rows[-1, 0] == 700.0


def test_cli_depths_file_shallow_side(tmp_path: Path, depth_points_file: Path):
    output_path = tmp_path / "profile.csv"

    result = runner.invoke(
        app, [str(output_path), "--depths-file", str(depth_points_file), "--dcabove"]
    )

    assert result.exit_code == 0, result.output
    df = pd.read_csv(output_path)
    assert df["depth"].tolist() == [100.0, 35.0, 0.0, 2889.0]
    assert df["vp"].tolist()[1] == 6.5
    assert df["vs"].tolist()[3] == 7.3015


def test_cli_depths_file_deep_side(tmp_path: Path, depth_points_file: Path):
    output_path = tmp_path / "profile.csv"

    result = runner.invoke(
        app, [str(output_path), "--depths-file", str(depth_points_file), "--dcbelow"]
    )

    assert result.exit_code == 0, result.output
    df = pd.read_csv(output_path)
    assert df["vp"].tolist()[1] == 8.04
    assert df["vs"].tolist()[3] == 0.0
