"""Output format entry points for batch jobs.

This module exposes the job-level pre-flight check, the per-task writer
factory, and a task driver that pushes a record stream through one writer.
"""

from __future__ import annotations

from typing import Iterable

from core.config import JobConfig, require_output_table
from core.logging_config import get_logger
from core.types import WriteStats
from store.hbase_client import HBaseStoreClient
from store.store_client import StoreClient
from store.table_writer import TableRecordWriter

_LOGGER = get_logger(__name__)


def check_output_specs(config: JobConfig) -> str:
    """Validate job output settings before any task runs.

    Args:
        config: Job configuration.

    Returns:
        Validated output table name.

    Raises:
        MissingTableNameError: If no output table is configured.
    """
    table_name = require_output_table(config)
    _LOGGER.info("output_specs_checked", table=table_name)
    return table_name


def open_record_writer(config: JobConfig, client: StoreClient | None = None) -> TableRecordWriter:
    """Open a record writer for one output task.

    Args:
        config: Job configuration.
        client: Optional store client; HappyBase when omitted.

    Returns:
        Active record writer.
    """
    return TableRecordWriter(config, client or HBaseStoreClient())


def run_output_task(
    records: Iterable[tuple[object, object]],
    config: JobConfig,
    client: StoreClient | None = None,
) -> WriteStats:
    """Write every record of one task through a single writer.

    The writer is closed whether the stream completes or a record fails.

    Args:
        records: Ordered ``(key, value)`` pairs for the task.
        config: Job configuration.
        client: Optional store client; HappyBase when omitted.

    Returns:
        Final writer counters.
    """
    with open_record_writer(config, client) as writer:
        for key, value in records:
            writer.write(key, value)
    return writer.stats
