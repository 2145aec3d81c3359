import sys

import numpy as np
import pytest

from envicube.codec import (
    DataType,
    ScalarValue,
    byte_width,
    host_is_big_endian,
    numpy_dtype,
    reverse_bytes,
    swap_scalars,
)


@pytest.mark.parametrize(
    "data_type,width",
    [
        (DataType.BYTE, 1),
        (DataType.INT16, 2),
        (DataType.UINT16, 2),
        (DataType.INT32, 4),
        (DataType.UINT32, 4),
        (DataType.FLOAT32, 4),
        (DataType.UINT64, 8),
        (DataType.ULONG, 8),
        (DataType.FLOAT64, 8),
    ],
)
def test_byte_width(data_type, width):
    assert byte_width(data_type) == width


@pytest.mark.parametrize(
    "token,expected",
    [
        ("1", DataType.BYTE),
        ("byte", DataType.BYTE),
        ("2", DataType.INT16),
        ("3", DataType.INT32),
        ("4", DataType.FLOAT32),
        ("float", DataType.FLOAT32),
        ("5", DataType.FLOAT64),
        ("double", DataType.FLOAT64),
        ("12", DataType.UINT16),
        ("13", DataType.UINT32),
        ("14", DataType.UINT64),
        ("15", DataType.ULONG),
        (" Int16 ", DataType.INT16),
    ],
)
def test_data_type_from_token(token, expected):
    assert DataType.from_token(token) is expected


def test_data_type_from_unknown_token():
    with pytest.raises(ValueError, match="Unsupported"):
        DataType.from_token("complex")


def test_uint64_and_ulong_are_distinct_members():
    assert DataType.UINT64 is not DataType.ULONG
    assert len(list(DataType)) == 9


def test_reverse_bytes_in_place():
    buf = bytearray(b"\x01\x02\x03\x04")
    reverse_bytes(buf)
    assert buf == bytearray(b"\x04\x03\x02\x01")

    odd = bytearray(b"\x01\x02\x03")
    reverse_bytes(odd)
    assert odd == bytearray(b"\x03\x02\x01")

    single = bytearray(b"\x07")
    reverse_bytes(single)
    assert single == bytearray(b"\x07")


def test_swap_scalars_reverses_each_scalar():
    assert swap_scalars(b"\x01\x02\x03\x04", 2) == b"\x02\x01\x04\x03"
    assert swap_scalars(b"\x01\x02\x03\x04", 4) == b"\x04\x03\x02\x01"
    assert swap_scalars(b"\x01\x02", 1) == b"\x01\x02"
    assert swap_scalars(b"", 4) == b""


def test_host_endianness_detection():
    assert host_is_big_endian() == (sys.byteorder == "big")


def test_numpy_dtype_byte_order():
    assert numpy_dtype(DataType.INT16, big_endian=True) == np.dtype(">i2")
    assert numpy_dtype(DataType.INT16, big_endian=False) == np.dtype("<i2")
    assert numpy_dtype(DataType.BYTE, big_endian=True) == np.dtype("u1")
    assert numpy_dtype(DataType.FLOAT64) == np.dtype("f8")


def test_scalar_value_tagged_interpretation():
    v = ScalarValue.from_number(1.5, DataType.FLOAT32)
    assert v.value == 1.5
    assert v.as_float == 1.5
    assert len(v.raw) == 8
    assert len(v.payload) == 4

    neg = ScalarValue.from_number(-1, DataType.INT16)
    assert neg.as_int16 == -1
    assert neg.as_uint16 == 65535
    assert neg.as_byte == 255

    big = ScalarValue.from_number(2**63 + 5, DataType.UINT64)
    assert big.as_uint64 == 2**63 + 5

    d = ScalarValue.from_number(-2.25, DataType.FLOAT64)
    assert d.as_double == -2.25
    assert float(d) == -2.25


def test_scalar_value_zero_and_equality():
    zero = ScalarValue.zero(DataType.INT32)
    assert zero == 0
    assert zero.as_int32 == 0
    assert ScalarValue.from_number(7, DataType.INT32) == 7
    assert ScalarValue.from_number(7, DataType.INT32) != 8
    assert ScalarValue.from_number(7, DataType.INT32) == ScalarValue.from_number(7, DataType.INT32)
    # Same numeric value under a different tag is a different scalar.
    assert ScalarValue.from_number(7, DataType.INT32) != ScalarValue.from_number(7, DataType.UINT32)
    assert int(ScalarValue.from_number(300, DataType.UINT16)) == 300


def test_scalar_value_from_bytes_with_byte_order():
    be = np.array([1234], dtype=">i4").tobytes()
    le = np.array([1234], dtype="<i4").tobytes()
    assert ScalarValue.from_bytes(be, DataType.INT32, big_endian=True) == 1234
    assert ScalarValue.from_bytes(le, DataType.INT32, big_endian=False) == 1234
    assert ScalarValue.from_bytes(be, DataType.INT32, big_endian=True) == ScalarValue.from_bytes(
        le, DataType.INT32, big_endian=False
    )


def test_scalar_value_rejects_wrong_width():
    with pytest.raises(ValueError):
        ScalarValue.from_bytes(b"\x00\x01\x02", DataType.INT32)
    with pytest.raises(ValueError):
        ScalarValue(DataType.FLOAT64, bytes(9))
