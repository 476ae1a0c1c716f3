"""
Precision casting and byte-order serialization.

Values are cast to IEEE-754 single or double precision with numpy's
round-to-nearest semantics and written with an explicit byte order, so the
output layout does not depend on the host.
"""

import logging
import sys
from typing import Union

import numpy as np

from .config import ByteOrder, Precision
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

EncodedValue = Union[np.float32, np.float64]

_BYTE_ORDER_PREFIX = {
    ByteOrder.LITTLE: "<",
    ByteOrder.BIG: ">",
}


def encode(value: float, precision: Precision) -> EncodedValue:
    """
    Cast a double precision sample to the requested representation.

    Out-of-range values saturate to +/-inf and tiny values underflow as the
    target format dictates; nothing is clamped.
    """
    if precision is Precision.DOUBLE:
        return np.float64(value)
    with np.errstate(over="ignore", under="ignore"):
        return np.float32(value)


def resolve_byte_order(byte_order: ByteOrder) -> ByteOrder:
    """Map NATIVE to the host's concrete byte order. Call once per run."""
    if byte_order is ByteOrder.NATIVE:
        resolved = ByteOrder.LITTLE if sys.byteorder == "little" else ByteOrder.BIG
        logger.debug(f"Native byte order resolved to {resolved.value}")
        return resolved
    return byte_order


def value_dtype(precision: Precision, byte_order: ByteOrder) -> np.dtype:
    """Return the numpy dtype for one value in a concrete byte order."""
    if byte_order is ByteOrder.NATIVE:
        raise ValueError("byte order must be resolved before building a dtype")
    return np.dtype(_BYTE_ORDER_PREFIX[byte_order] + precision.dtype_char)


def serialize(encoded: EncodedValue, byte_order: ByteOrder) -> bytes:
    """
    Serialize one encoded value.

    Args:
        encoded: float32 or float64 scalar from encode()
        byte_order: LITTLE or BIG; NATIVE is resolved here if passed through

    Returns:
        Exactly 4 or 8 bytes
    """
    byte_order = resolve_byte_order(byte_order)
    precision = Precision.SINGLE if encoded.dtype.itemsize == 4 else Precision.DOUBLE
    return np.array(encoded, dtype=value_dtype(precision, byte_order)).tobytes()


def decode(
    data: bytes,
    precision: Union[str, Precision] = Precision.SINGLE,
    byte_order: Union[str, ByteOrder] = ByteOrder.NATIVE,
) -> np.ndarray:
    """
    Read a headerless value stream back into float64 values.

    Args:
        data: Raw bytes produced by a run
        precision: Width the stream was written with
        byte_order: Byte order the stream was written with

    Returns:
        1-D float64 array
    """
    precision = Precision.parse(precision)
    byte_order = resolve_byte_order(ByteOrder.parse(byte_order))
    if len(data) % precision.width:
        raise InvalidConfigurationError(
            f"Stream length {len(data)} is not a multiple of {precision.width} bytes"
        )
    values = np.frombuffer(data, dtype=value_dtype(precision, byte_order))
    return values.astype(np.float64)
