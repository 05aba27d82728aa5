"""HBase store client backed by HappyBase.

This module encapsulates HappyBase connection creation and batching.
It adapts tagged mutations onto Thrift ``family:qualifier`` puts.
"""

from __future__ import annotations

from typing import Any

from core.config import JobConfig
from core.constants import COLUMN_SEPARATOR, DEFAULT_CLUSTER_ADDRESS
from core.errors import StoreConnectionError, TableSinkDependencyError
from core.logging_config import get_logger
from core.types import Mutation

_LOGGER = get_logger(__name__)


class HBaseStoreClient:
    """Store client that opens HappyBase table connections."""

    def open(self, config: JobConfig, table_name: str) -> "HBaseTableConnection":
        """Open a connection to one HBase table.

        Args:
            config: Job configuration with gateway settings.
            table_name: Target table name.

        Returns:
            Open table connection with unbuffered writes.

        Raises:
            TableSinkDependencyError: If happybase is missing.
            StoreConnectionError: If the Thrift gateway is unreachable.
        """
        happybase = _import_happybase()
        host = config.cluster_address or DEFAULT_CLUSTER_ADDRESS
        try:
            connection = happybase.Connection(
                host=host,
                port=config.cluster_port,
                table_prefix=config.table_prefix,
            )
            try:
                table = connection.table(table_name)
            except Exception:
                connection.close()
                raise
        except Exception as error:
            _LOGGER.error(
                "store_connection_failed",
                table=table_name,
                host=host,
                port=config.cluster_port,
                error=str(error),
            )
            raise StoreConnectionError(
                f"Failed to open table '{table_name}' at {host}:{config.cluster_port}: {error}. "
                "Check store.cluster.address and that the HBase Thrift server is running."
            ) from error
        return HBaseTableConnection(connection, table, config.write_buffer_size)


class HBaseTableConnection:
    """Table handle that submits puts directly or through a batch."""

    def __init__(self, connection: Any, table: Any, batch_size: int) -> None:
        self._connection = connection
        self._table = table
        self._batch_size = batch_size
        self._batch: Any = None

    def set_buffered_writes(self, enabled: bool) -> None:
        """Switch between client-side batching and per-put round trips.

        Disabling buffering sends anything already buffered first.
        """
        if enabled and self._batch is None:
            self._batch = self._table.batch(batch_size=self._batch_size)
        elif not enabled and self._batch is not None:
            self._batch.send()
            self._batch = None

    def submit(self, mutation: Mutation) -> None:
        """Submit one put.

        Cells sharing a family and qualifier collapse to the last value,
        matching HBase last-write-wins for a single put.
        """
        data = mutation_to_columns(mutation)
        if self._batch is not None:
            self._batch.put(mutation.row_key, data)
        else:
            self._table.put(mutation.row_key, data)

    def close(self) -> None:
        """Flush any buffered puts and close the Thrift transport."""
        try:
            if self._batch is not None:
                self._batch.send()
                self._batch = None
        finally:
            self._connection.close()


def mutation_to_columns(mutation: Mutation) -> dict[bytes, bytes]:
    """Render mutation cells as HappyBase column data.

    Args:
        mutation: Mutation to render.

    Returns:
        Mapping of ``family:qualifier`` column names to values.
    """
    return {
        cell.family + COLUMN_SEPARATOR + cell.qualifier: cell.value for cell in mutation.cells
    }


def _import_happybase() -> Any:
    try:
        import happybase
    except ImportError as error:
        raise TableSinkDependencyError(
            "HBase output requires happybase, but it is not installed. "
            "Install happybase to write to HBase tables."
        ) from error
    return happybase
