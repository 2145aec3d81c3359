from __future__ import annotations

import enum
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from ..codec import byte_width, host_is_big_endian, swap_scalars
from ..cube import Cube
from ..errors import ErrorKind, Status
from ..layout import iter_absolute_indices, iter_runs, to_bsq
from ..options import DataOptions, DataRange
from ..utils import get_logger
from .writer import write_cube

logger = get_logger(__name__)


class ReaderState(enum.Enum):
    UNOPENED = "unopened"
    VALIDATING = "validating"
    READING = "reading"
    POPULATED = "populated"
    FAILED = "failed"


class CubeReader:
    """Reads rectangular sub-volumes of an ENVI binary file into a Cube.

    Only the requested range is read: the file is traversed in its own
    interleave order and a seek is issued only where the traversal skips
    values. The resulting Cube is always BSQ-ordered in memory.
    """

    def __init__(self, options: DataOptions, progress: bool = False) -> None:
        self.options = options
        self.progress = progress
        self.host_big_endian = host_is_big_endian()
        self.state = ReaderState.UNOPENED
        self.cube = Cube()

    def _fail(self, kind: ErrorKind, message: str) -> Status:
        logger.error(message)
        self.state = ReaderState.FAILED
        return Status.failure(kind, message)

    def validate(self, data_range: DataRange) -> Status:
        opts = self.options
        if opts.file_path is None:
            return Status.failure(ErrorKind.CONFIGURATION, "No data file path configured")
        if opts.header_offset < 0:
            return Status.failure(
                ErrorKind.CONFIGURATION, f"Header offset must not be negative, got {opts.header_offset}"
            )
        if min(opts.extents) <= 0:
            return Status.failure(
                ErrorKind.CONFIGURATION,
                f"Data extents must be positive, got rows={opts.num_data_rows} "
                f"cols={opts.num_data_cols} bands={opts.num_data_bands}",
            )
        axes = (
            ("row", data_range.start_row, data_range.end_row, opts.num_data_rows),
            ("column", data_range.start_col, data_range.end_col, opts.num_data_cols),
            ("band", data_range.start_band, data_range.end_band, opts.num_data_bands),
        )
        for name, start, end, extent in axes:
            if start < 0 or end > extent:
                return Status.failure(
                    ErrorKind.RANGE, f"Invalid {name} range [{start}, {end}): must be between 0 and {extent}"
                )
            if end <= start:
                return Status.failure(ErrorKind.RANGE, f"{name.capitalize()} range [{start}, {end}) must be positive")
        return Status.success()

    def read_data(self, data_range: Optional[DataRange] = None) -> Status:
        """Read ``data_range`` (default: the whole cube) and replace the current Cube.

        On failure the previous Cube is left untouched.
        """
        opts = self.options
        data_range = data_range or DataRange.full(opts)

        self.state = ReaderState.VALIDATING
        status = self.validate(data_range)
        if not status:
            return self._fail(status.kind, status.message)

        self.state = ReaderState.READING
        rows, cols, bands = data_range.shape
        width = byte_width(opts.data_type)
        total = rows * cols * bands
        path = Path(opts.file_path)
        indices = iter_absolute_indices(opts.interleave, opts.extents, data_range.bounds)

        chunks: List[bytes] = []
        try:
            f = open(path, "rb")
        except OSError as e:
            return self._fail(ErrorKind.IO, f"File {path} could not be opened for reading: {e}")
        try:
            with f, tqdm(
                total=total, unit="value", desc="Reading", disable=not self.progress
            ) as bar:
                previous = None
                for start, count in iter_runs(indices):
                    if previous is None or start != previous + 1:
                        f.seek((opts.header_offset + start) * width)
                    size = count * width
                    data = f.read(size)
                    if len(data) != size:
                        return self._fail(
                            ErrorKind.SHORT_READ,
                            f"Short read from {path}: expected {size} bytes at value {start}, got {len(data)}",
                        )
                    chunks.append(data)
                    previous = start + count - 1
                    bar.update(count)
        except OSError as e:
            return self._fail(ErrorKind.IO, f"Reading {path} failed: {e}")

        raw = b"".join(chunks)
        if opts.big_endian != self.host_big_endian:
            raw = swap_scalars(raw, width)
        raw = to_bsq(raw, opts.interleave, rows, cols, bands, width)

        cube = Cube()
        cube.set_data(raw, rows, cols, bands, opts.interleave, opts.data_type)
        self.cube = cube
        self.state = ReaderState.POPULATED
        logger.info(
            "Read %d values (%dx%dx%d %s %s) from %s", total, rows, cols, bands,
            opts.interleave.name, opts.data_type.token, path,
        )
        return Status.success()

    def read_bounds(
        self,
        start_row: int,
        end_row: int,
        start_col: int,
        end_col: int,
        start_band: int,
        end_band: int,
    ) -> Status:
        return self.read_data(DataRange(start_row, end_row, start_col, end_col, start_band, end_band))

    def get_data(self) -> Cube:
        return self.cube

    def write_data(self, save_path: Path) -> Status:
        """Write the loaded Cube (BSQ) in the byte order declared by the options."""
        return write_cube(self.cube, save_path, big_endian=self.options.big_endian,
                          host_big_endian=self.host_big_endian)
