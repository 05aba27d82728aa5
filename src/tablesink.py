"""Public API surface for Tablesink.

This module provides a stable import path for batch job authors.
It re-exports the output format entry points and typed models.
"""

from __future__ import annotations

from core.config import JobConfig
from core.types import (
    BoolScalar,
    Float32Scalar,
    Float64Scalar,
    Int32Scalar,
    Int64Scalar,
    Mutation,
    RawBytesScalar,
    TextScalar,
    WriteStats,
)
from store.hbase_client import HBaseStoreClient
from store.output_format import check_output_specs, open_record_writer, run_output_task
from store.table_writer import TableRecordWriter
from transforms.byte_encoder import encode_scalar, encode_value
from transforms.mutation_builder import build_mutation

__all__ = [
    "BoolScalar",
    "Float32Scalar",
    "Float64Scalar",
    "HBaseStoreClient",
    "Int32Scalar",
    "Int64Scalar",
    "JobConfig",
    "Mutation",
    "RawBytesScalar",
    "TableRecordWriter",
    "TextScalar",
    "WriteStats",
    "build_mutation",
    "check_output_specs",
    "encode_scalar",
    "encode_value",
    "open_record_writer",
    "run_output_task",
]
