import numpy as np
import pytest

from envicube.layout import (
    Interleave,
    absolute_index,
    bsq_local_index,
    iter_absolute_indices,
    iter_runs,
    to_bsq,
    traversal_shape,
)

# rows=2, cols=3, bands=3; sub-range rows [0,2), cols [1,3), bands [0,2)
EXTENTS = (2, 3, 3)
BOUNDS = (0, 2, 1, 3, 0, 2)


def test_full_range_of_tiny_cube_is_sequential_in_every_layout():
    for interleave in Interleave:
        assert list(iter_absolute_indices(interleave, (2, 2, 2), (0, 2, 0, 2, 0, 2))) == list(range(8))


def test_bsq_traversal_is_band_major():
    assert list(iter_absolute_indices(Interleave.BSQ, EXTENTS, BOUNDS)) == [1, 2, 4, 5, 7, 8, 10, 11]


def test_bil_traversal_is_row_major_band_minor():
    assert list(iter_absolute_indices(Interleave.BIL, EXTENTS, BOUNDS)) == [1, 2, 4, 5, 10, 11, 13, 14]


def test_bip_traversal_is_row_then_col_then_band():
    assert list(iter_absolute_indices(Interleave.BIP, EXTENTS, BOUNDS)) == [3, 4, 6, 7, 12, 13, 15, 16]


def test_bil_and_bsq_differ_on_non_square_extents():
    extents = (3, 2, 2)  # rows=3, cols=2, bands=2
    bounds = (1, 3, 0, 1, 0, 2)
    # BSQ: band*6 + row*2 + col
    assert list(iter_absolute_indices(Interleave.BSQ, extents, bounds)) == [2, 4, 8, 10]
    # BIL: row*4 + band*2 + col
    assert list(iter_absolute_indices(Interleave.BIL, extents, bounds)) == [4, 6, 8, 10]
    # BIP: row*4 + col*2 + band
    assert list(iter_absolute_indices(Interleave.BIP, extents, bounds)) == [4, 5, 8, 9]


@pytest.mark.parametrize("interleave", list(Interleave))
def test_traversal_agrees_with_absolute_index(interleave):
    expected = []
    start_row, end_row, start_col, end_col, start_band, end_band = BOUNDS
    for row in range(start_row, end_row):
        for col in range(start_col, end_col):
            for band in range(start_band, end_band):
                expected.append(absolute_index(interleave, row, col, band, EXTENTS))
    produced = list(iter_absolute_indices(interleave, EXTENTS, BOUNDS))
    assert sorted(produced) == sorted(expected)
    assert produced == sorted(produced)


def test_index_sequence_is_single_use():
    gen = iter_absolute_indices(Interleave.BSQ, EXTENTS, BOUNDS)
    assert len(list(gen)) == 8
    assert list(gen) == []


def test_iter_runs_groups_contiguous_indices():
    assert list(iter_runs([1, 2, 4, 5, 10])) == [(1, 2), (4, 2), (10, 1)]
    assert list(iter_runs(range(5))) == [(0, 5)]
    assert list(iter_runs([])) == []
    assert list(iter_runs([3, 2])) == [(3, 1), (2, 1)]


def test_bsq_local_index():
    assert bsq_local_index(0, 0, 0, 2, 2) == 0
    assert bsq_local_index(1, 1, 1, 2, 2) == 7
    assert bsq_local_index(1, 0, 2, 3, 4) == 2 * 12 + 4


@pytest.mark.parametrize("interleave", list(Interleave))
def test_to_bsq_relayout(interleave):
    logical = np.arange(2 * 3 * 4, dtype=np.int16).reshape(4, 2, 3)  # bands, rows, cols
    axes = {Interleave.BSQ: (0, 1, 2), Interleave.BIL: (1, 0, 2), Interleave.BIP: (1, 2, 0)}[interleave]
    traversal = np.ascontiguousarray(logical.transpose(axes))
    assert traversal.shape == traversal_shape(interleave, 2, 3, 4)
    out = to_bsq(traversal.tobytes(), interleave, 2, 3, 4, 2)
    assert out == logical.tobytes()


def test_interleave_from_token():
    assert Interleave.from_token(" BIL ") is Interleave.BIL
    with pytest.raises(ValueError, match="interleave"):
        Interleave.from_token("bsx")
