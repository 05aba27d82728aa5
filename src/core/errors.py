"""Tablesink exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TableSinkError(Exception):
    """Base exception for all Tablesink failures."""


class TableSinkConfigError(TableSinkError):
    """Raised for invalid job configuration."""


class MissingTableNameError(TableSinkConfigError):
    """Raised when the required output table name is absent."""


class ScalarEncodingError(TableSinkError):
    """Raised when a value cannot be turned into store bytes."""


class UnsupportedScalarTypeError(ScalarEncodingError):
    """Raised for values outside the supported scalar type set."""

    def __init__(self, type_name: str) -> None:
        super().__init__(
            f"Unsupported scalar type '{type_name}'. Expected bool, int32, int64, "
            "float32, float64, text, or raw bytes."
        )
        self.type_name = type_name


class ScalarRangeError(ScalarEncodingError):
    """Raised when a scalar value is invalid for its declared type."""


class RecordTranslationError(TableSinkError):
    """Raised when a record cannot be translated into a mutation."""


class InvalidKeyError(RecordTranslationError):
    """Raised when a record key cannot be encoded as a row key."""


class InvalidColumnDataError(RecordTranslationError):
    """Raised when a record value is not an encodable column mapping."""


class TableSinkStoreError(TableSinkError):
    """Raised for store connection and writer lifecycle failures."""


class StoreConnectionError(TableSinkStoreError):
    """Raised when the store connection cannot be opened."""


class StoreWriteError(TableSinkStoreError):
    """Raised when the store rejects or fails a submitted mutation."""


class WriterClosedError(TableSinkStoreError):
    """Raised when a closed record writer receives another record."""


class TableSinkIngestError(TableSinkError):
    """Raised for malformed typed-bytes input streams."""


class TableSinkDependencyError(TableSinkError):
    """Raised when an optional runtime dependency is missing."""
