from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import h5py
import numpy as np

from ..cube import Cube
from ..utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class H5ExportOptions:
    dataset: str = "cube"
    compression: Optional[str] = "gzip"
    compression_opts: int = 4
    shuffle: bool = True
    # (bands, rows, cols) chunk upper bounds; clipped to the cube shape
    chunks: Tuple[int, int, int] = (1, 64, 64)
    overwrite: bool = False


def _chunk_shape(shape: Tuple[int, int, int], limit: Tuple[int, int, int]) -> Tuple[int, int, int]:
    return tuple(max(1, min(s, c)) for s, c in zip(shape, limit))


def export_h5(cube: Cube, h5_path: Path, options: H5ExportOptions | None = None) -> Path:
    """Store a loaded cube as a (bands, rows, cols) dataset in an HDF5 file.

    Raises FileExistsError when the dataset already exists and overwrite is off.
    """
    options = options or H5ExportOptions()
    h5_path = Path(h5_path)
    if cube.is_empty():
        raise ValueError("Cannot export an empty cube")

    data = cube.to_numpy()
    h5_path.parent.mkdir(parents=True, exist_ok=True)
    with h5py.File(h5_path, "a") as f:
        if options.dataset in f:
            if not options.overwrite:
                raise FileExistsError(f"{h5_path} already contains dataset '{options.dataset}'")
            del f[options.dataset]
        ds = f.create_dataset(
            options.dataset,
            data=data,
            chunks=_chunk_shape(data.shape, options.chunks),
            compression=options.compression,
            compression_opts=options.compression_opts if options.compression == "gzip" else None,
            shuffle=options.shuffle,
        )
        ds.attrs["description"] = "Hyperspectral sub-cube (bands, rows, cols)."
        ds.attrs["source_interleave"] = cube.interleave.value
        ds.attrs["data_type"] = cube.data_type.token
        ds.attrs["envi_data_type"] = np.int32(cube.data_type.code)

    logger.info("Exported %s cube %s to %s:%s", cube.data_type.token, data.shape, h5_path, options.dataset)
    return h5_path


def open_h5(h5_path: Path, mode: str = "r") -> h5py.File:
    return h5py.File(h5_path, mode)
