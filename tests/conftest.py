from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from envicube.codec import DataType, numpy_dtype
from envicube.layout import Interleave
from envicube.options import DataOptions

# Axis order of the file for a logical (bands, rows, cols) array.
FILE_AXES = {
    Interleave.BSQ: (0, 1, 2),
    Interleave.BIL: (1, 0, 2),
    Interleave.BIP: (1, 2, 0),
}


def write_envi_file(
    path: Path,
    cube: np.ndarray,
    interleave: Interleave = Interleave.BSQ,
    data_type: DataType = DataType.FLOAT32,
    big_endian: bool = False,
    header_offset: int = 0,
) -> DataOptions:
    """Write a logical (bands, rows, cols) array as an ENVI binary file."""
    dtype = numpy_dtype(data_type, big_endian=big_endian)
    ordered = np.ascontiguousarray(np.transpose(cube, FILE_AXES[interleave])).astype(dtype)
    padding = bytes(header_offset * dtype.itemsize)
    path.write_bytes(padding + ordered.tobytes())
    bands, rows, cols = cube.shape
    return DataOptions(
        file_path=path,
        interleave=interleave,
        data_type=data_type,
        big_endian=big_endian,
        header_offset=header_offset,
        num_data_rows=rows,
        num_data_cols=cols,
        num_data_bands=bands,
    )


@pytest.fixture
def make_cube_file(tmp_path):
    counter = {"n": 0}

    def _make(cube: np.ndarray, **kwargs) -> DataOptions:
        counter["n"] += 1
        return write_envi_file(tmp_path / f"cube_{counter['n']}.raw", cube, **kwargs)

    return _make


@pytest.fixture
def sequential_cube() -> np.ndarray:
    """2 bands x 2 rows x 2 cols holding 0..7 in BSQ order."""
    return np.arange(8, dtype=np.float32).reshape(2, 2, 2)


@pytest.fixture
def random_cube() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(-1000, 1000, size=(5, 4, 6)).astype(np.float32)
