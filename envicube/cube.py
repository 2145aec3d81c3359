from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .codec import DataType, ScalarValue, byte_width, numpy_dtype
from .errors import ErrorKind, Status
from .layout import Interleave, bsq_local_index
from .utils import get_logger

logger = get_logger(__name__)


@dataclass
class Cube:
    """A loaded sub-volume of an ENVI cube.

    ``raw_data`` holds host-order scalars laid out BSQ over the loaded
    extents, whatever interleave the source file used; ``interleave`` records
    that source layout.
    """

    num_rows: int = 0
    num_cols: int = 0
    num_bands: int = 0
    interleave: Interleave = Interleave.BSQ
    data_type: DataType = DataType.FLOAT32
    raw_data: bytes = b""

    @property
    def shape(self):
        return (self.num_rows, self.num_cols, self.num_bands)

    @property
    def scalar_width(self) -> int:
        return byte_width(self.data_type)

    def num_data_points(self) -> int:
        return self.num_rows * self.num_cols * self.num_bands

    def is_empty(self) -> bool:
        return self.num_data_points() == 0

    def set_data(
        self,
        raw_data: bytes,
        num_rows: int,
        num_cols: int,
        num_bands: int,
        interleave: Interleave,
        data_type: DataType,
    ) -> None:
        """Replace buffer and metadata together."""
        expected = num_rows * num_cols * num_bands * byte_width(data_type)
        if len(raw_data) != expected:
            raise ValueError(f"Buffer holds {len(raw_data)} bytes, expected {expected}")
        self.num_rows, self.num_cols, self.num_bands = num_rows, num_cols, num_bands
        self.interleave = interleave
        self.data_type = data_type
        self.raw_data = bytes(raw_data)

    def check_index(self, row: int, col: int, band: int) -> Status:
        """Status of a lookup at (row, col, band); ``ErrorKind.INDEX`` when out of range."""
        axes = (
            ("Row", row, self.num_rows),
            ("Column", col, self.num_cols),
            ("Band", band, self.num_bands),
        )
        for name, index, extent in axes:
            if not 0 <= index < extent:
                return Status.failure(
                    ErrorKind.INDEX, f"{name} index out of range: {index} must be between 0 and {extent - 1}"
                )
        return Status.success()

    def get_value(self, row: int, col: int, band: int) -> ScalarValue:
        """Value at (row, col, band) of the loaded sub-cube.

        Out-of-range coordinates are logged and yield a zero scalar.
        """
        status = self.check_index(row, col, band)
        if not status:
            logger.error(status.message)
            return ScalarValue.zero(self.data_type)
        width = self.scalar_width
        offset = bsq_local_index(row, col, band, self.num_rows, self.num_cols) * width
        return ScalarValue(self.data_type, self.raw_data[offset:offset + width])

    def get_value_as_float(self, row: int, col: int, band: int) -> float:
        return float(self.get_value(row, col, band))

    def get_spectrum(self, row: int, col: int) -> List[ScalarValue]:
        return [self.get_value(row, col, band) for band in range(self.num_bands)]

    def get_spectrum_as_floats(self, row: int, col: int) -> List[float]:
        return [float(v) for v in self.get_spectrum(row, col)]

    def to_numpy(self) -> np.ndarray:
        """Read-only view shaped (bands, rows, cols) in the cube's native dtype."""
        arr = np.frombuffer(self.raw_data, dtype=numpy_dtype(self.data_type))
        return arr.reshape(self.num_bands, self.num_rows, self.num_cols)

    def band_image(self, band: int) -> np.ndarray:
        if not 0 <= band < self.num_bands:
            raise IndexError(f"Band index out of range: {band} must be between 0 and {self.num_bands - 1}")
        return self.to_numpy()[band]
