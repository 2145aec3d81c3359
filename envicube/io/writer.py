from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..codec import host_is_big_endian, swap_scalars
from ..cube import Cube
from ..errors import ErrorKind, Status
from ..utils import get_logger

logger = get_logger(__name__)

# Scalars written per chunk.
WRITE_CHUNK = 1 << 20


def write_cube(
    cube: Cube,
    save_path: Path,
    big_endian: bool = False,
    host_big_endian: Optional[bool] = None,
) -> Status:
    """Write the cube's BSQ buffer sequentially in the requested byte order."""
    if host_big_endian is None:
        host_big_endian = host_is_big_endian()
    save_path = Path(save_path)
    width = cube.scalar_width
    reverse = big_endian != host_big_endian
    step = WRITE_CHUNK * width
    try:
        with open(save_path, "wb") as f:
            for start in range(0, len(cube.raw_data), step):
                chunk = cube.raw_data[start:start + step]
                if reverse:
                    chunk = swap_scalars(chunk, width)
                f.write(chunk)
    except OSError as e:
        message = f"File {save_path} could not be opened for writing: {e}"
        logger.error(message)
        return Status.failure(ErrorKind.IO, message)
    logger.info("Wrote %d values to %s", cube.num_data_points(), save_path)
    return Status.success()


def write_header(
    cube: Cube,
    header_path: Path,
    big_endian: bool = False,
    data_path: Optional[Path] = None,
) -> Status:
    """Write an ENVI header describing a file produced by :func:`write_cube`.

    The samples/lines assignment mirrors the one used when parsing BSQ
    headers (samples = rows, lines = cols), so the written pair can be read
    back with ``parse_header``. Standard ENVI readers such as spectral or GDAL
    take samples as columns and will see the image transposed.
    """
    header_path = Path(header_path)
    lines = [
        "ENVI",
        "description = {envicube sub-cube}",
        f"samples = {cube.num_rows}",
        f"lines = {cube.num_cols}",
        f"bands = {cube.num_bands}",
        "header offset = 0",
        "file type = ENVI Standard",
        f"data type = {cube.data_type.code}",
        "interleave = bsq",
        f"byte order = {1 if big_endian else 0}",
    ]
    if data_path is not None:
        lines.append(f"data = {Path(data_path).resolve()}")
    try:
        header_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        message = f"Header {header_path} could not be written: {e}"
        logger.error(message)
        return Status.failure(ErrorKind.IO, message)
    return Status.success()
