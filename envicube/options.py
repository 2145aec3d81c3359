from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .codec import DataType
from .layout import Bounds, Extents, Interleave


@dataclass(frozen=True)
class DataOptions:
    """Location and format of an ENVI binary file.

    Extents describe the whole file, not the part to be read, and must all be
    positive before reading. ``header_offset`` counts scalar widths.
    """

    file_path: Optional[Path] = None
    interleave: Interleave = Interleave.BSQ
    data_type: DataType = DataType.FLOAT32
    big_endian: bool = False
    header_offset: int = 0
    num_data_rows: int = 0
    num_data_cols: int = 0
    num_data_bands: int = 0

    @property
    def extents(self) -> Extents:
        return (self.num_data_rows, self.num_data_cols, self.num_data_bands)


@dataclass(frozen=True)
class DataRange:
    """Half-open, zero-indexed sub-range of the full cube."""

    start_row: int = 0
    end_row: int = 0
    start_col: int = 0
    end_col: int = 0
    start_band: int = 0
    end_band: int = 0

    @classmethod
    def full(cls, options: DataOptions) -> "DataRange":
        return cls(0, options.num_data_rows, 0, options.num_data_cols, 0, options.num_data_bands)

    @property
    def bounds(self) -> Bounds:
        return (self.start_row, self.end_row, self.start_col, self.end_col, self.start_band, self.end_band)

    @property
    def shape(self) -> Tuple[int, int, int]:
        """(rows, cols, bands) spanned by the range."""
        return (self.end_row - self.start_row, self.end_col - self.start_col, self.end_band - self.start_band)
