"""Shared typed models.

This module defines the tagged scalar union and the mutation models
shared by the translation, store, and ingest layers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from core.constants import (
    FLOAT32_OVERFLOW_THRESHOLD,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
)
from core.errors import ScalarRangeError, UnsupportedScalarTypeError


@dataclass(frozen=True)
class BoolScalar:
    """Boolean cell, key, family, or qualifier value."""

    value: bool

    def __post_init__(self) -> None:
        _check_type(self.value, bool)


@dataclass(frozen=True)
class Int32Scalar:
    """Signed 32-bit integer value."""

    value: int

    def __post_init__(self) -> None:
        _check_int_range(self.value, INT32_MIN, INT32_MAX, "int32")


@dataclass(frozen=True)
class Int64Scalar:
    """Signed 64-bit integer value."""

    value: int

    def __post_init__(self) -> None:
        _check_int_range(self.value, INT64_MIN, INT64_MAX, "int64")


@dataclass(frozen=True)
class Float32Scalar:
    """Single-precision float value.

    Finite values slightly above the largest float32 are accepted when they
    round down to it; values that would round to infinity are rejected.
    """

    value: float

    def __post_init__(self) -> None:
        _check_float(self.value)
        if math.isfinite(self.value) and abs(self.value) >= FLOAT32_OVERFLOW_THRESHOLD:
            raise ScalarRangeError(
                f"Value {self.value!r} is outside float32 range. Use Float64Scalar instead."
            )


@dataclass(frozen=True)
class Float64Scalar:
    """Double-precision float value."""

    value: float

    def __post_init__(self) -> None:
        _check_float(self.value)


@dataclass(frozen=True)
class TextScalar:
    """Unicode text value stored as UTF-8."""

    value: str

    def __post_init__(self) -> None:
        _check_type(self.value, str)


@dataclass(frozen=True)
class RawBytesScalar:
    """Opaque byte value stored unchanged."""

    value: bytes

    def __post_init__(self) -> None:
        _check_type(self.value, bytes)


Scalar = Union[
    BoolScalar,
    Int32Scalar,
    Int64Scalar,
    Float32Scalar,
    Float64Scalar,
    TextScalar,
    RawBytesScalar,
]
SCALAR_TYPES: tuple[type, ...] = (
    BoolScalar,
    Int32Scalar,
    Int64Scalar,
    Float32Scalar,
    Float64Scalar,
    TextScalar,
    RawBytesScalar,
)


@dataclass(frozen=True)
class Cell:
    """One encoded family/qualifier/value triple.

    Attributes:
        family: Column family bytes.
        qualifier: Column qualifier bytes.
        value: Cell value bytes.
    """

    family: bytes
    qualifier: bytes
    value: bytes


@dataclass(frozen=True)
class Mutation:
    """A single put targeting one row.

    Attributes:
        row_key: Encoded row key shared by all cells.
        cells: Encoded cells in mapping iteration order.
    """

    row_key: bytes
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class MutationBuildResult:
    """Outcome of translating one record.

    Attributes:
        mutation: Built mutation, or None when the whole record was skipped.
        skipped_families: Families dropped because their qualifier map was null.
        skipped_cells: Qualifiers dropped because their cell value was null.
    """

    mutation: Mutation | None
    skipped_families: int = 0
    skipped_cells: int = 0


@dataclass
class WriteStats:
    """Running counters for one record writer.

    Attributes:
        records_written: Records submitted as mutations.
        records_skipped: Records skipped for a null key or value.
        cells_written: Cells across all submitted mutations.
        families_skipped: Families skipped for a null qualifier map.
        cells_skipped: Qualifiers skipped for a null cell value.
    """

    records_written: int = 0
    records_skipped: int = 0
    cells_written: int = 0
    families_skipped: int = 0
    cells_skipped: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return counters as a plain mapping for logs and CLI output."""
        return {
            "records_written": self.records_written,
            "records_skipped": self.records_skipped,
            "cells_written": self.cells_written,
            "families_skipped": self.families_skipped,
            "cells_skipped": self.cells_skipped,
        }


def _check_int_range(value: int, lower: int, upper: int, width_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedScalarTypeError(type(value).__name__)
    if not lower <= value <= upper:
        raise ScalarRangeError(
            f"Value {value} is outside {width_name} range [{lower}, {upper}]."
        )


def _check_float(value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedScalarTypeError(type(value).__name__)
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError as error:
            raise ScalarRangeError("Integer value is too large for a float scalar.") from error


def _check_type(value: object, expected_type: type) -> None:
    if not isinstance(value, expected_type):
        raise UnsupportedScalarTypeError(type(value).__name__)
