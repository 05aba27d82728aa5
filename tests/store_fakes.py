"""In-memory store client doubles for writer tests."""

from __future__ import annotations

from core.config import JobConfig
from core.types import Mutation


class FakeConnection:
    """Connection that records every call instead of talking to a store."""

    def __init__(
        self,
        table_name: str,
        submit_error: Exception | None = None,
        close_error: Exception | None = None,
    ) -> None:
        self.table_name = table_name
        self.submit_error = submit_error
        self.close_error = close_error
        self.buffered = False
        self.submitted: list[Mutation] = []
        self.close_count = 0

    def set_buffered_writes(self, enabled: bool) -> None:
        self.buffered = enabled

    def submit(self, mutation: Mutation) -> None:
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(mutation)

    def close(self) -> None:
        self.close_count += 1
        if self.close_error is not None:
            raise self.close_error


class FakeStoreClient:
    """Client that hands out fake connections."""

    def __init__(
        self,
        submit_error: Exception | None = None,
        close_error: Exception | None = None,
    ) -> None:
        self.submit_error = submit_error
        self.close_error = close_error
        self.connections: list[FakeConnection] = []
        self.opened_configs: list[JobConfig] = []

    def open(self, config: JobConfig, table_name: str) -> FakeConnection:
        connection = FakeConnection(table_name, self.submit_error, self.close_error)
        self.connections.append(connection)
        self.opened_configs.append(config)
        return connection

    @property
    def connection(self) -> FakeConnection:
        return self.connections[-1]
