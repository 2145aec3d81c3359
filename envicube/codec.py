from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

SCALAR_CAPACITY = 8


class DataType(enum.Enum):
    """Scalar encodings supported in ENVI cubes.

    Each member carries its ENVI ``data type`` code, the header name and the
    NumPy type character used to reinterpret raw bytes.
    """

    BYTE = (1, "byte", "u1")
    INT16 = (2, "int16", "i2")
    INT32 = (3, "int32", "i4")
    FLOAT32 = (4, "float", "f4")
    FLOAT64 = (5, "double", "f8")
    UINT16 = (12, "uint16", "u2")
    UINT32 = (13, "uint32", "u4")
    UINT64 = (14, "uint64", "u8")
    ULONG = (15, "ulong", "u8")

    def __init__(self, code: int, token: str, type_char: str) -> None:
        self.code = code
        self.token = token
        self.type_char = type_char

    @classmethod
    def from_token(cls, token: Union[str, int]) -> "DataType":
        """Resolve an ENVI numeric code or type name (``"4"``, ``"float"``)."""
        text = str(token).strip().lower()
        for member in cls:
            if text == str(member.code) or text == member.token:
                return member
        raise ValueError(f"Unsupported/unknown data type: {token}")


def byte_width(data_type: DataType) -> int:
    return np.dtype(data_type.type_char).itemsize


def numpy_dtype(data_type: DataType, big_endian: Optional[bool] = None) -> np.dtype:
    """NumPy dtype for ``data_type``; native order unless ``big_endian`` is given."""
    dtype = np.dtype(data_type.type_char)
    if big_endian is None or dtype.itemsize == 1:
        return dtype
    return dtype.newbyteorder(">" if big_endian else "<")


def host_is_big_endian() -> bool:
    # The first byte of an unsigned 1 is zero on big-endian machines.
    probe = np.array([1], dtype=np.uint32).view(np.uint8)
    return int(probe[0]) != 1


def reverse_bytes(buffer: bytearray) -> None:
    """Reverse the byte order of a single scalar's raw bytes in place."""
    size = len(buffer)
    for i in range(size // 2):
        end = size - 1 - i
        buffer[i], buffer[end] = buffer[end], buffer[i]


def swap_scalars(buffer: bytes, width: int) -> bytes:
    """Reverse the bytes of every ``width``-sized scalar in ``buffer``."""
    if width == 1 or not buffer:
        return bytes(buffer)
    arr = np.frombuffer(buffer, dtype=np.dtype(f"u{width}"))
    return arr.byteswap().tobytes()


@dataclass(frozen=True, eq=False)
class ScalarValue:
    """Raw bytes of one scalar, tagged with the type they were decoded as.

    ``raw`` always holds :data:`SCALAR_CAPACITY` bytes in host byte order; only
    the first ``byte_width(data_type)`` bytes are significant. Accessors
    reinterpret those bytes regardless of the tag.
    """

    data_type: DataType
    raw: bytes = bytes(SCALAR_CAPACITY)

    def __post_init__(self) -> None:
        if len(self.raw) > SCALAR_CAPACITY:
            raise ValueError(f"Scalar payload of {len(self.raw)} bytes exceeds {SCALAR_CAPACITY}")
        if len(self.raw) < SCALAR_CAPACITY:
            object.__setattr__(self, "raw", bytes(self.raw) + bytes(SCALAR_CAPACITY - len(self.raw)))

    @classmethod
    def zero(cls, data_type: DataType) -> "ScalarValue":
        return cls(data_type)

    @classmethod
    def from_bytes(cls, data: bytes, data_type: DataType, big_endian: Optional[bool] = None) -> "ScalarValue":
        """Decode one scalar; ``big_endian`` gives the order of ``data`` when it is not host order."""
        width = byte_width(data_type)
        if len(data) != width:
            raise ValueError(f"Expected {width} bytes for {data_type.token}, got {len(data)}")
        payload = bytearray(data)
        if big_endian is not None and big_endian != host_is_big_endian():
            reverse_bytes(payload)
        return cls(data_type, bytes(payload))

    @classmethod
    def from_number(cls, number: Union[int, float], data_type: DataType) -> "ScalarValue":
        return cls(data_type, np.array([number], dtype=numpy_dtype(data_type)).tobytes())

    def _view(self, type_char: str):
        width = np.dtype(type_char).itemsize
        return np.frombuffer(self.raw[:width], dtype=np.dtype(type_char))[0].item()

    @property
    def as_byte(self) -> int:
        return self._view("u1")

    @property
    def as_int16(self) -> int:
        return self._view("i2")

    @property
    def as_int32(self) -> int:
        return self._view("i4")

    @property
    def as_uint16(self) -> int:
        return self._view("u2")

    @property
    def as_uint32(self) -> int:
        return self._view("u4")

    @property
    def as_uint64(self) -> int:
        return self._view("u8")

    @property
    def as_float(self) -> float:
        return self._view("f4")

    @property
    def as_double(self) -> float:
        return self._view("f8")

    @property
    def value(self) -> Union[int, float]:
        """The interpretation selected by the type tag."""
        return self._view(self.data_type.type_char)

    @property
    def payload(self) -> bytes:
        return self.raw[: byte_width(self.data_type)]

    def __float__(self) -> float:
        return float(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ScalarValue):
            return self.data_type is other.data_type and self.payload == other.payload
        if isinstance(other, (int, float, np.number)):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.data_type, self.payload))

    def __repr__(self) -> str:
        return f"ScalarValue({self.data_type.token}={self.value!r})"
