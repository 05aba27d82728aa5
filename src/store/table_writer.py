"""Record writer that persists translated records as table puts.

This module owns the store connection for one output task. The writer
moves from uninitialized to active on construction and to closed on
``close``; the connection is released on every exit path.
"""

from __future__ import annotations

from types import TracebackType
from typing import Literal

from core.config import JobConfig, require_output_table
from core.errors import (
    RecordTranslationError,
    StoreWriteError,
    TableSinkStoreError,
    WriterClosedError,
)
from core.logging_config import get_logger
from core.types import Mutation, WriteStats
from store.store_client import StoreClient, StoreConnection
from transforms.mutation_builder import build_mutation

_LOGGER = get_logger(__name__)

WriterState = Literal["uninitialized", "active", "closed"]


class TableRecordWriter:
    """Write framework records into one table.

    Null keys, null values, null qualifier maps, and null cells are
    "nothing to write" signals and are skipped without error. Any other
    record the writer cannot encode is a data-contract violation and
    fails the write; no partial mutation reaches the store.

    Writes are buffered client-side and flushed on ``close``. The writer
    does not deduplicate: writing the same record twice submits twice.
    """

    def __init__(self, config: JobConfig, client: StoreClient) -> None:
        """Validate config and open the table connection.

        Args:
            config: Job configuration.
            client: Store client used to open the table.

        Raises:
            MissingTableNameError: If no output table is configured.
            StoreConnectionError: If the connection cannot be opened.
        """
        self._state: WriterState = "uninitialized"
        self._table_name = require_output_table(config)
        self._connection: StoreConnection = client.open(config, self._table_name)
        try:
            self._connection.set_buffered_writes(True)
        except Exception:
            self._connection.close()
            raise
        self._stats = WriteStats()
        self._state = "active"
        _LOGGER.info(
            "record_writer_opened",
            table=self._table_name,
            cluster_address=config.cluster_address,
            buffered=True,
        )

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def stats(self) -> WriteStats:
        return self._stats

    def write(self, key: object, value: object) -> None:
        """Translate and submit one record.

        Args:
            key: Record key scalar.
            value: Family -> qualifier -> cell mapping.

        Raises:
            InvalidKeyError: If the key cannot be encoded.
            InvalidColumnDataError: If the value cannot be encoded.
            StoreWriteError: If the store rejects the mutation.
            WriterClosedError: If the writer was already closed.
        """
        if self._state != "active":
            raise WriterClosedError(
                f"Record writer for table '{self._table_name}' is {self._state}; "
                "records cannot be written after close."
            )
        try:
            result = build_mutation(key, value)
        except RecordTranslationError as error:
            _LOGGER.warning("record_rejected", table=self._table_name, error=str(error))
            raise
        self._stats.families_skipped += result.skipped_families
        self._stats.cells_skipped += result.skipped_cells
        if result.mutation is None:
            self._stats.records_skipped += 1
            _LOGGER.debug(
                "record_skipped",
                table=self._table_name,
                key_missing=key is None,
                value_missing=value is None,
            )
            return
        self._submit(result.mutation)
        self._stats.records_written += 1
        self._stats.cells_written += len(result.mutation.cells)

    def close(self) -> None:
        """Flush buffered puts and release the connection.

        Calling close on a closed writer does nothing.

        Raises:
            StoreWriteError: If flushing buffered puts fails.
        """
        if self._state == "closed":
            return
        self._state = "closed"
        try:
            self._connection.close()
        except TableSinkStoreError:
            raise
        except Exception as error:
            _LOGGER.error("store_flush_failed", table=self._table_name, error=str(error))
            raise StoreWriteError(
                f"Failed to flush buffered writes to table '{self._table_name}': {error}."
            ) from error
        _LOGGER.info("record_writer_closed", table=self._table_name, **self._stats.as_dict())

    def __enter__(self) -> "TableRecordWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_value is None:
            self.close()
            return
        try:
            self.close()
        except TableSinkStoreError as close_error:
            # the exception raised inside the block propagates unchanged
            _LOGGER.error(
                "record_writer_close_failed",
                table=self._table_name,
                error=str(close_error),
                original_error=str(exc_value),
            )

    def _submit(self, mutation: Mutation) -> None:
        try:
            self._connection.submit(mutation)
        except StoreWriteError:
            raise
        except Exception as error:
            _LOGGER.error(
                "store_write_failed",
                table=self._table_name,
                row_key=mutation.row_key.hex(),
                error=str(error),
            )
            raise StoreWriteError(
                f"Failed to write row to table '{self._table_name}': {error}. "
                "The store client already applied its retry policy."
            ) from error
