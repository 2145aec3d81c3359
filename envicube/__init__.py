"""Reader/writer for hyperspectral ENVI cubes."""

from .codec import DataType, ScalarValue, byte_width
from .cube import Cube
from .errors import CubeError, ErrorKind, Status
from .layout import Interleave
from .options import DataOptions, DataRange

__version__ = "0.1.0"

__all__ = [
    "Cube",
    "CubeError",
    "DataOptions",
    "DataRange",
    "DataType",
    "ErrorKind",
    "Interleave",
    "ScalarValue",
    "Status",
    "byte_width",
    "__version__",
]
