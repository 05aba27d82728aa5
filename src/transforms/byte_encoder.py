"""Canonical byte encoding for tagged scalars.

Numeric widths are fixed and big-endian so that encoded values keep the
byte-comparison order HBase uses for row keys and qualifiers.
"""

from __future__ import annotations

import struct

from core.constants import HBASE_FALSE_BYTE, HBASE_TRUE_BYTE
from core.errors import ScalarRangeError, UnsupportedScalarTypeError
from core.types import (
    BoolScalar,
    Float32Scalar,
    Float64Scalar,
    Int32Scalar,
    Int64Scalar,
    RawBytesScalar,
    TextScalar,
)
from transforms.scalar_coercion import coerce_scalar

_INT32 = struct.Struct(">i")
_INT64 = struct.Struct(">q")
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")


def encode_scalar(scalar: object) -> bytes:
    """Encode one tagged scalar into store bytes.

    Args:
        scalar: Tagged scalar value.

    Returns:
        Canonical byte representation.

    Raises:
        UnsupportedScalarTypeError: If ``scalar`` is not a tagged scalar.
    """
    if isinstance(scalar, BoolScalar):
        return HBASE_TRUE_BYTE if scalar.value else HBASE_FALSE_BYTE
    if isinstance(scalar, Int32Scalar):
        return _INT32.pack(scalar.value)
    if isinstance(scalar, Int64Scalar):
        return _INT64.pack(scalar.value)
    if isinstance(scalar, Float32Scalar):
        return _FLOAT32.pack(scalar.value)
    if isinstance(scalar, Float64Scalar):
        return _FLOAT64.pack(scalar.value)
    if isinstance(scalar, TextScalar):
        try:
            return scalar.value.encode("utf-8")
        except UnicodeEncodeError as error:
            raise ScalarRangeError(
                f"Text value is not valid UTF-8 ({error.reason}). Store it as raw bytes."
            ) from error
    if isinstance(scalar, RawBytesScalar):
        return scalar.value
    raise UnsupportedScalarTypeError(type(scalar).__name__)


def encode_value(value: object) -> bytes:
    """Coerce a raw value to a scalar and encode it.

    Raises:
        ScalarEncodingError: If the value is unsupported or out of range.
    """
    return encode_scalar(coerce_scalar(value))
