"""Address computation for the three ENVI interleave layouts.

Absolute indices count scalars (not bytes) from the first value after the
header, over the full extents of the file. Byte offsets are obtained by
multiplying with the scalar width.
"""

from __future__ import annotations

import enum
from typing import Iterable, Iterator, Tuple

import numpy as np


class Interleave(enum.Enum):
    BSQ = "bsq"  # band > row > col
    BIL = "bil"  # row > band > col
    BIP = "bip"  # row > col > band

    @classmethod
    def from_token(cls, token: str) -> "Interleave":
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported/unknown data interleave format: {token}") from None


Extents = Tuple[int, int, int]
Bounds = Tuple[int, int, int, int, int, int]


def absolute_index(interleave: Interleave, row: int, col: int, band: int, extents: Extents) -> int:
    """Linear scalar index of (row, col, band) in a file of ``extents`` (rows, cols, bands)."""
    rows, cols, bands = extents
    if interleave is Interleave.BSQ:
        return band * (rows * cols) + row * cols + col
    if interleave is Interleave.BIL:
        return row * (bands * cols) + band * cols + col
    return row * (cols * bands) + col * bands + band


def iter_absolute_indices(interleave: Interleave, extents: Extents, bounds: Bounds) -> Iterator[int]:
    """Yield absolute indices of a half-open sub-range in traversal order.

    ``bounds`` is (start_row, end_row, start_col, end_col, start_band, end_band).
    The generator is single-use; call again to restart.
    """
    start_row, end_row, start_col, end_col, start_band, end_band = bounds
    rows, cols, bands = extents
    if interleave is Interleave.BSQ:
        band_size = rows * cols
        for band in range(start_band, end_band):
            for row in range(start_row, end_row):
                base = band * band_size + row * cols
                for col in range(start_col, end_col):
                    yield base + col
    elif interleave is Interleave.BIL:
        line_size = bands * cols
        for row in range(start_row, end_row):
            for band in range(start_band, end_band):
                base = row * line_size + band * cols
                for col in range(start_col, end_col):
                    yield base + col
    else:
        line_size = cols * bands
        for row in range(start_row, end_row):
            for col in range(start_col, end_col):
                base = row * line_size + col * bands
                for band in range(start_band, end_band):
                    yield base + band


def iter_runs(indices: Iterable[int]) -> Iterator[Tuple[int, int]]:
    """Group an index sequence into contiguous ``(start, count)`` runs.

    A new run begins wherever an index is not exactly one past its predecessor.
    """
    start = None
    count = 0
    for index in indices:
        if start is not None and index == start + count:
            count += 1
            continue
        if start is not None:
            yield start, count
        start, count = index, 1
    if start is not None:
        yield start, count


def traversal_shape(interleave: Interleave, rows: int, cols: int, bands: int) -> Extents:
    if interleave is Interleave.BSQ:
        return (bands, rows, cols)
    if interleave is Interleave.BIL:
        return (rows, bands, cols)
    return (rows, cols, bands)


# Axis permutation taking a traversal-ordered array to (band, row, col).
_TO_BSQ_AXES = {
    Interleave.BSQ: (0, 1, 2),
    Interleave.BIL: (1, 0, 2),
    Interleave.BIP: (2, 0, 1),
}


def to_bsq(buffer: bytes, interleave: Interleave, rows: int, cols: int, bands: int, width: int) -> bytes:
    """Re-lay out a buffer read in ``interleave`` traversal order into BSQ order."""
    if interleave is Interleave.BSQ:
        return bytes(buffer)
    shape = traversal_shape(interleave, rows, cols, bands)
    arr = np.frombuffer(buffer, dtype=np.uint8).reshape(*shape, width)
    axes = _TO_BSQ_AXES[interleave] + (3,)
    return np.ascontiguousarray(arr.transpose(axes)).tobytes()


def bsq_local_index(row: int, col: int, band: int, rows: int, cols: int) -> int:
    """Index of (row, col, band) inside a loaded, BSQ-ordered sub-cube."""
    return band * (rows * cols) + row * cols + col
