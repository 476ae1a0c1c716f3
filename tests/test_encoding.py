"""
Tests for precision casting, byte-order serialization and decoding.
"""

import sys

import numpy as np
import pytest

from synthdata.config import ByteOrder, Precision
from synthdata.encoding import decode, encode, resolve_byte_order, serialize
from synthdata.errors import InvalidConfigurationError


def test_encode_single_rounds_to_nearest():
    encoded = encode(0.1, Precision.SINGLE)
    assert encoded.dtype == np.float32
    assert encoded == np.float32(0.1)


def test_encode_double_is_exact():
    encoded = encode(0.1, Precision.DOUBLE)
    assert encoded.dtype == np.float64
    assert float(encoded) == 0.1


def test_encode_single_overflow_saturates():
    """Values beyond the float32 range become infinities, not clamped maxima."""
    assert np.isposinf(encode(1e40, Precision.SINGLE))
    assert np.isneginf(encode(-1e40, Precision.SINGLE))


def test_encode_single_underflow():
    assert encode(1e-50, Precision.SINGLE) == np.float32(0.0)


def test_serialize_single():
    one = encode(1.0, Precision.SINGLE)
    assert serialize(one, ByteOrder.LITTLE) == b"\x00\x00\x80\x3f"
    assert serialize(one, ByteOrder.BIG) == b"\x3f\x80\x00\x00"


def test_serialize_double():
    one = encode(1.0, Precision.DOUBLE)
    assert serialize(one, ByteOrder.LITTLE) == b"\x00" * 6 + b"\xf0\x3f"
    assert serialize(one, ByteOrder.BIG) == b"\x3f\xf0" + b"\x00" * 6


def test_serialize_width():
    assert len(serialize(encode(-2.5, Precision.SINGLE), ByteOrder.BIG)) == 4
    assert len(serialize(encode(-2.5, Precision.DOUBLE), ByteOrder.BIG)) == 8


def test_native_matches_host():
    resolved = resolve_byte_order(ByteOrder.NATIVE)
    assert resolved.value == sys.byteorder
    value = encode(3.25, Precision.DOUBLE)
    assert serialize(value, ByteOrder.NATIVE) == serialize(value, resolved)
    assert serialize(value, ByteOrder.NATIVE) == value.tobytes()


def test_explicit_orders_unchanged():
    assert resolve_byte_order(ByteOrder.LITTLE) is ByteOrder.LITTLE
    assert resolve_byte_order(ByteOrder.BIG) is ByteOrder.BIG


@pytest.mark.parametrize("precision", [Precision.SINGLE, Precision.DOUBLE])
def test_decode_big_and_little(precision):
    values = [1.5, -0.25, 1024.0]
    little = b"".join(serialize(encode(v, precision), ByteOrder.LITTLE) for v in values)
    big = b"".join(serialize(encode(v, precision), ByteOrder.BIG) for v in values)
    assert little != big
    np.testing.assert_array_equal(decode(little, precision, "little"), values)
    np.testing.assert_array_equal(decode(big, precision, "big"), values)


def test_decode_rejects_partial_values():
    with pytest.raises(InvalidConfigurationError):
        decode(b"\x00" * 6, Precision.SINGLE, ByteOrder.LITTLE)


def test_decode_empty():
    assert decode(b"", "double", "le").size == 0
