"""Ingestion-time conversion of raw values into tagged scalars.

Records arrive from the batch framework as plain Python values.
This module assigns each one a scalar tag once, before encoding.
"""

from __future__ import annotations

from core.constants import INT64_MAX, INT64_MIN
from core.errors import ScalarRangeError, UnsupportedScalarTypeError
from core.types import (
    SCALAR_TYPES,
    BoolScalar,
    Float64Scalar,
    Int64Scalar,
    RawBytesScalar,
    Scalar,
    TextScalar,
)


def coerce_scalar(value: object) -> Scalar:
    """Tag a raw value with its scalar type.

    Tagged scalars pass through unchanged. Plain ``int`` maps to int64 and
    plain ``float`` to float64; wrap a value in ``Int32Scalar`` or
    ``Float32Scalar`` to store the narrower width.

    Args:
        value: Raw or already tagged value.

    Returns:
        Tagged scalar.

    Raises:
        UnsupportedScalarTypeError: If the value type is not supported.
        ScalarRangeError: If a plain int does not fit in 64 bits.
    """
    if isinstance(value, SCALAR_TYPES):
        return value  # type: ignore[return-value]
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BoolScalar(value)
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise ScalarRangeError(
                f"Integer {value} does not fit in int64. Store it as text or raw bytes."
            )
        return Int64Scalar(value)
    if isinstance(value, float):
        return Float64Scalar(value)
    if isinstance(value, str):
        return TextScalar(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawBytesScalar(bytes(value))
    raise UnsupportedScalarTypeError(type(value).__name__)
