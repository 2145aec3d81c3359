from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from ..cube import Cube


def band_to_uint8(band: np.ndarray) -> np.ndarray:
    """Min/max stretch a 2-D band to uint8; constant bands become black."""
    values = band.astype(np.float64)
    finite = np.isfinite(values)
    if not finite.any():
        return np.zeros(values.shape, dtype=np.uint8)
    lo = float(values[finite].min())
    hi = float(values[finite].max())
    if hi <= lo:
        return np.zeros(values.shape, dtype=np.uint8)
    scaled = (np.where(finite, values, lo) - lo) / (hi - lo)
    return np.round(scaled * 255.0).astype(np.uint8)


def save_band_png(cube: Cube, band: int, png_path: Path) -> Path:
    """Write one band of the cube as a grayscale PNG (rows x cols)."""
    png_path = Path(png_path)
    png_path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(band_to_uint8(cube.band_image(band)))
    img.save(png_path)
    return png_path
