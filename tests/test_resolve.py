import logging

import numpy as np
import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from radial_earth.exceptions import DomainError, OptionTypeError
from radial_earth.model_table import ModelTable, clip, full_table, resolve
from tests.common import (
    DISCONTINUITY_DEPTHS,
    MOHO_DEEP_SIDE,
    MOHO_SHALLOW_SIDE,
    manual_interpolation,
)

SINGLE_KNOT_DEPTHS = [
    float(d)
    for d in np.unique(full_table().depth)
    if np.count_nonzero(full_table().depth == d) == 1
]


@pytest.mark.parametrize("dcbelow", [True, False])
def test_exact_knot_identity(iasp91_table: ModelTable, dcbelow: bool):
    """Depths on a single knot return the stored values for either dcbelow."""
    result = resolve(iasp91_table, SINGLE_KNOT_DEPTHS, dcbelow=dcbelow)
    expected = iasp91_table.take(
        [int(np.flatnonzero(iasp91_table.depth == d)[0]) for d in SINGLE_KNOT_DEPTHS]
    )
    assert result == expected


@pytest.mark.parametrize(
    "dcbelow, expected", [(False, MOHO_SHALLOW_SIDE), (True, MOHO_DEEP_SIDE)]
)
def test_moho_selection(iasp91_table: ModelTable, dcbelow: bool, expected: tuple):
    result = resolve(iasp91_table, [35], dcbelow=dcbelow)

    assert len(result) == 1
    assert result[0].depth == 35.0
    assert (result[0].vp, result[0].vs, result[0].rho) == expected


@pytest.mark.parametrize("depth", DISCONTINUITY_DEPTHS)
def test_discontinuity_sides(iasp91_table: ModelTable, depth: float):
    shallow, deep = np.flatnonzero(iasp91_table.depth == depth)

    below = resolve(iasp91_table, depth)
    above = resolve(iasp91_table, depth, dcbelow=False)

    np.testing.assert_array_equal(below.properties[0], iasp91_table.properties[deep])
    np.testing.assert_array_equal(above.properties[0], iasp91_table.properties[shallow])


def test_default_is_deep_side(iasp91_table: ModelTable):
    assert resolve(iasp91_table, [2889.0]).vs[0] == 0.0
    assert resolve(iasp91_table, [2889.0], dcbelow=False).vs[0] == 7.3015


@settings(max_examples=200, deadline=None)
@given(d=st.floats(min_value=0.0, max_value=6371.0, allow_nan=False))
def test_linear_between_knots(d: float):
    """Interior depths match a manual two-point linear interpolation."""
    table = full_table()
    assume(not np.any(table.depth == d))

    result = resolve(table, [d])

    np.testing.assert_allclose(
        result.properties[0],
        manual_interpolation(table.depth, table.properties, d),
        rtol=1e-9,
    )


def test_interpolation_at_100_km(iasp91_table: ModelTable):
    # between 77.5 and 120 km
    weight = (100.0 - 77.5) / (120.0 - 77.5)
    expected = np.array([8.0450, 4.4850, 3.3455]) + weight * (
        np.array([8.0500, 4.5000, 3.3713]) - np.array([8.0450, 4.4850, 3.3455])
    )
    np.testing.assert_allclose(resolve(iasp91_table, 100).properties[0], expected)


def test_outer_core_interpolation_stays_fluid(iasp91_table: ModelTable):
    result = resolve(iasp91_table, np.linspace(2890.0, 5150.0, 50))
    assert np.all(result.vs == 0.0)
    assert np.all(result.vp > 0.0)


def test_order_and_multiplicity(iasp91_table: ModelTable):
    result = resolve(iasp91_table, [100, 50, 100])

    assert result.depth.tolist() == [100.0, 50.0, 100.0]
    assert result[0] == result[2]
    assert result[0] != result[1]


@settings(max_examples=50, deadline=None)
@given(
    depths=st.lists(
        st.floats(min_value=0.0, max_value=6371.0, allow_nan=False), max_size=20
    )
)
def test_each_depth_resolved_independently(depths: list[float]):
    """Resolving a list equals resolving each depth on its own."""
    table = full_table()
    together = resolve(table, depths)

    assert together.depth.tolist() == depths
    for i, d in enumerate(depths):
        assert together[i] == resolve(table, d)[0]


def test_edges_of_domain(iasp91_table: ModelTable):
    result = resolve(iasp91_table, [0.0, 6371.0])

    assert result[0] == iasp91_table[0]
    assert result[1] == iasp91_table[-1]


def test_accepts_numpy_and_tuples(iasp91_table: ModelTable):
    assert resolve(iasp91_table, np.array([10, 20])) == resolve(iasp91_table, (10.0, 20.0))


def test_empty_request(iasp91_table: ModelTable):
    result = resolve(iasp91_table, [])
    assert len(result) == 0


def test_crustless_surface(crustless_table: ModelTable):
    result = resolve(crustless_table, [0.0, 35.0, 20.0], dcbelow=False)

    np.testing.assert_array_equal(result.properties[0], [8.0359, 4.4576, 3.2986])
    # no discontinuity remains at 35 km
    np.testing.assert_array_equal(result.properties[1], MOHO_DEEP_SIDE)
    assert result.vp[2] > 8.0359


@pytest.mark.parametrize("depths", [[-1], [6372], [100, 6371.5], [np.nan], [np.inf]])
def test_domain_validation(iasp91_table: ModelTable, depths: list):
    with pytest.raises(DomainError, match=r"within the range \[0, 6371\]"):
        resolve(iasp91_table, depths)


def test_domain_error_is_logged(iasp91_table: ModelTable, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.ERROR, logger="radial_earth.model_table"):
        with pytest.raises(DomainError):
            resolve(iasp91_table, [-1])
    assert "depths must be real-valued km depths" in caplog.text


def test_depths_outside_clipped_table(iasp91_table: ModelTable):
    clipped = clip(iasp91_table, 100, 200)
    with pytest.raises(DomainError, match=r"\[100, 200\]"):
        resolve(clipped, [50])


@pytest.mark.parametrize("depths", ["deep", [[1, 2], [3, 4]], [1 + 2j], [None]])
def test_type_validation(iasp91_table: ModelTable, depths: object):
    with pytest.raises(OptionTypeError, match="depths must be a real number"):
        resolve(iasp91_table, depths)


def test_dcbelow_must_be_bool(iasp91_table: ModelTable):
    with pytest.raises(TypeError, match="dcbelow must be True or False"):
        resolve(iasp91_table, [35], dcbelow="yes")


def test_resolve_rejects_unsorted_table(iasp91_table: ModelTable):
    query_result = resolve(iasp91_table, [100.0, 50.0])
    with pytest.raises(ValueError, match="must be non-decreasing"):
        resolve(query_result, [75.0])
