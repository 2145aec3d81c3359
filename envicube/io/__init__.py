"""I/O subpackage.

Submodules are not imported at package import time so that optional heavy
dependencies (h5py, Pillow) load only when used. Import them directly:

    from envicube.io.reader import CubeReader
    from envicube.io.writer import write_cube, write_header
    from envicube.io.header import parse_header, parse_range
    from envicube.io.hdf5_writer import export_h5
    from envicube.io.quicklook import save_band_png
"""

__all__ = []
