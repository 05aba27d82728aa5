"""Hadoop typed-bytes stream reader.

This module decodes the key/value stream a streaming reduce stage emits
in typed-bytes format. Scalars decode to tagged scalars so that the
declared wire width (int vs long, float vs double) reaches the encoder.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from core.errors import TableSinkIngestError
from core.types import (
    BoolScalar,
    Float32Scalar,
    Float64Scalar,
    Int32Scalar,
    Int64Scalar,
    RawBytesScalar,
    TextScalar,
)

BYTES_CODE = 0
BYTE_CODE = 1
BOOL_CODE = 2
INT_CODE = 3
LONG_CODE = 4
FLOAT_CODE = 5
DOUBLE_CODE = 6
STRING_CODE = 7
VECTOR_CODE = 8
LIST_CODE = 9
MAP_CODE = 10
MARKER_CODE = 255

_INT32 = struct.Struct(">i")
_INT64 = struct.Struct(">q")
_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")


@dataclass(frozen=True)
class TypedByte:
    """Single signed byte from a typed-bytes stream.

    Decoded for completeness; the store encoder does not accept it.
    """

    value: int


class _ListEnd:
    """Sentinel for the list terminator code."""


_LIST_END = _ListEnd()


def read_typedbytes_records(stream: BinaryIO) -> Iterator[tuple[object, object]]:
    """Yield ``(key, value)`` pairs from a typed-bytes stream.

    Args:
        stream: Binary stream positioned at the first key.

    Yields:
        Decoded key and value objects.

    Raises:
        TableSinkIngestError: If the stream is malformed or truncated.
    """
    decoder = _TypedBytesDecoder(stream)
    record_number = 0
    while True:
        type_code = decoder.read_type_code(allow_eof=True)
        if type_code is None:
            return
        record_number += 1
        key = decoder.read_value(type_code)
        value_code = decoder.read_type_code(allow_eof=True)
        if value_code is None:
            raise TableSinkIngestError(
                f"Typed-bytes record {record_number} has a key but no value. "
                "The input stream is truncated."
            )
        yield key, decoder.read_value(value_code)


def read_typedbytes_value(stream: BinaryIO) -> object:
    """Decode exactly one typed-bytes value from a stream."""
    decoder = _TypedBytesDecoder(stream)
    return decoder.read_value(decoder.read_type_code(allow_eof=False))


class _TypedBytesDecoder:
    """Stateful decoder over one binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def read_type_code(self, allow_eof: bool) -> int | None:
        raw_code = self._stream.read(1)
        if not raw_code:
            if allow_eof:
                return None
            raise TableSinkIngestError("Unexpected end of typed-bytes stream: expected a type code.")
        return raw_code[0]

    def read_value(self, type_code: int | None) -> object:
        value = self._read_any(type_code)
        if value is _LIST_END:
            raise TableSinkIngestError("Unexpected typed-bytes list terminator outside a list.")
        return value

    def _read_any(self, type_code: int | None) -> object:
        if type_code == BYTES_CODE:
            return RawBytesScalar(self._read_sized())
        if type_code == BYTE_CODE:
            return TypedByte(struct.unpack(">b", self._read_exact(1))[0])
        if type_code == BOOL_CODE:
            return BoolScalar(self._read_exact(1) != b"\x00")
        if type_code == INT_CODE:
            return Int32Scalar(_INT32.unpack(self._read_exact(4))[0])
        if type_code == LONG_CODE:
            return Int64Scalar(_INT64.unpack(self._read_exact(8))[0])
        if type_code == FLOAT_CODE:
            return Float32Scalar(_FLOAT32.unpack(self._read_exact(4))[0])
        if type_code == DOUBLE_CODE:
            return Float64Scalar(_FLOAT64.unpack(self._read_exact(8))[0])
        if type_code == STRING_CODE:
            return TextScalar(self._read_text())
        if type_code == VECTOR_CODE:
            count = self._read_length()
            return tuple(self.read_value(self.read_type_code(False)) for _ in range(count))
        if type_code == LIST_CODE:
            return self._read_list()
        if type_code == MAP_CODE:
            return self._read_map()
        if type_code == MARKER_CODE:
            return _LIST_END
        raise TableSinkIngestError(
            f"Unsupported typed-bytes type code {type_code}. "
            "Only standard codes 0-10 are understood."
        )

    def _read_list(self) -> tuple[object, ...]:
        items: list[object] = []
        while True:
            item = self._read_any(self.read_type_code(False))
            if item is _LIST_END:
                return tuple(items)
            items.append(item)

    def _read_map(self) -> dict[object, object]:
        count = self._read_length()
        mapping: dict[object, object] = {}
        for _ in range(count):
            key = self.read_value(self.read_type_code(False))
            value = self.read_value(self.read_type_code(False))
            try:
                mapping[key] = value
            except TypeError as error:
                raise TableSinkIngestError(
                    f"Typed-bytes map key of type {type(key).__name__} is not hashable."
                ) from error
        return mapping

    def _read_text(self) -> str:
        raw_text = self._read_sized()
        try:
            return raw_text.decode("utf-8")
        except UnicodeDecodeError as error:
            raise TableSinkIngestError(
                f"Typed-bytes string is not valid UTF-8: {error}."
            ) from error

    def _read_sized(self) -> bytes:
        return self._read_exact(self._read_length())

    def _read_length(self) -> int:
        length = _INT32.unpack(self._read_exact(4))[0]
        if length < 0:
            raise TableSinkIngestError(f"Typed-bytes length prefix is negative: {length}.")
        return length

    def _read_exact(self, size: int) -> bytes:
        payload = self._stream.read(size)
        if len(payload) != size:
            raise TableSinkIngestError(
                f"Unexpected end of typed-bytes stream: expected {size} bytes, "
                f"got {len(payload)}."
            )
        return payload
