"""Unit tests for the HappyBase store client adapter."""

from __future__ import annotations

import sys
from types import SimpleNamespace

import pytest

from core.config import JobConfig
from core.errors import StoreConnectionError, TableSinkDependencyError
from core.types import Cell, Mutation
from store.hbase_client import HBaseStoreClient, mutation_to_columns


class _FakeBatch:
    def __init__(self, batch_size: int | None) -> None:
        self.batch_size = batch_size
        self.puts: list[tuple[bytes, dict[bytes, bytes]]] = []
        self.send_count = 0

    def put(self, row: bytes, data: dict[bytes, bytes]) -> None:
        self.puts.append((row, data))

    def send(self) -> None:
        self.send_count += 1


class _FakeTable:
    def __init__(self, name: str) -> None:
        self.name = name
        self.puts: list[tuple[bytes, dict[bytes, bytes]]] = []
        self.batches: list[_FakeBatch] = []

    def put(self, row: bytes, data: dict[bytes, bytes]) -> None:
        self.puts.append((row, data))

    def batch(self, batch_size: int | None = None) -> _FakeBatch:
        batch = _FakeBatch(batch_size)
        self.batches.append(batch)
        return batch


class _FakeHappyConnection:
    instances: list["_FakeHappyConnection"] = []

    def __init__(self, host: str, port: int, table_prefix: str | None = None) -> None:
        self.host = host
        self.port = port
        self.table_prefix = table_prefix
        self.tables: list[_FakeTable] = []
        self.closed = False
        _FakeHappyConnection.instances.append(self)

    def table(self, name: str) -> _FakeTable:
        table = _FakeTable(name)
        self.tables.append(table)
        return table

    def close(self) -> None:
        self.closed = True


def _install_fake_happybase(monkeypatch: pytest.MonkeyPatch, connection_type: type) -> None:
    _FakeHappyConnection.instances = []
    monkeypatch.setitem(sys.modules, "happybase", SimpleNamespace(Connection=connection_type))


def _mutation() -> Mutation:
    return Mutation(row_key=b"row", cells=(Cell(b"cf", b"q", b"v"),))


def test_open_uses_configured_address_and_port(monkeypatch: pytest.MonkeyPatch) -> None:
    """Connections should target the configured Thrift gateway."""
    _install_fake_happybase(monkeypatch, _FakeHappyConnection)
    config = JobConfig(output_table="events", cluster_address="hbase-1", cluster_port=9191)

    HBaseStoreClient().open(config, "events")

    connection = _FakeHappyConnection.instances[0]
    assert (connection.host, connection.port, connection.tables[0].name) == (
        "hbase-1",
        9191,
        "events",
    )


def test_open_defaults_to_localhost(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an address override the client default host is used."""
    _install_fake_happybase(monkeypatch, _FakeHappyConnection)

    HBaseStoreClient().open(JobConfig(output_table="events"), "events")

    assert _FakeHappyConnection.instances[0].host == "localhost"


def test_buffered_submit_goes_through_batch(monkeypatch: pytest.MonkeyPatch) -> None:
    """Buffered writes should queue puts in a HappyBase batch."""
    _install_fake_happybase(monkeypatch, _FakeHappyConnection)
    config = JobConfig(output_table="events", write_buffer_size=50)
    table_connection = HBaseStoreClient().open(config, "events")

    table_connection.set_buffered_writes(True)
    table_connection.submit(_mutation())

    table = _FakeHappyConnection.instances[0].tables[0]
    assert (table.puts, table.batches[0].batch_size, table.batches[0].puts) == (
        [],
        50,
        [(b"row", {b"cf:q": b"v"})],
    )


def test_unbuffered_submit_puts_directly(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without buffering each mutation is a direct table put."""
    _install_fake_happybase(monkeypatch, _FakeHappyConnection)
    table_connection = HBaseStoreClient().open(JobConfig(output_table="events"), "events")

    table_connection.submit(_mutation())

    assert _FakeHappyConnection.instances[0].tables[0].puts == [(b"row", {b"cf:q": b"v"})]


def test_close_flushes_batch_and_closes_transport(monkeypatch: pytest.MonkeyPatch) -> None:
    """Closing should send buffered puts before closing the connection."""
    _install_fake_happybase(monkeypatch, _FakeHappyConnection)
    table_connection = HBaseStoreClient().open(JobConfig(output_table="events"), "events")
    table_connection.set_buffered_writes(True)

    table_connection.close()

    connection = _FakeHappyConnection.instances[0]
    assert (connection.tables[0].batches[0].send_count, connection.closed) == (1, True)


def test_open_wraps_connection_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    """Gateway failures should surface as StoreConnectionError."""

    def _refuse(**_kwargs: object) -> None:
        raise OSError("connection refused")

    monkeypatch.setitem(sys.modules, "happybase", SimpleNamespace(Connection=_refuse))

    with pytest.raises(StoreConnectionError):
        HBaseStoreClient().open(JobConfig(output_table="events"), "events")


def test_open_raises_when_happybase_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing happybase install should raise a dependency error."""
    monkeypatch.setitem(sys.modules, "happybase", None)

    with pytest.raises(TableSinkDependencyError):
        HBaseStoreClient().open(JobConfig(output_table="events"), "events")


def test_mutation_to_columns_joins_family_and_qualifier() -> None:
    """Columns should be addressed as family:qualifier bytes."""
    mutation = Mutation(
        row_key=b"row",
        cells=(Cell(b"cf", b"a", b"1"), Cell(b"meta", b"b", b"2")),
    )

    assert mutation_to_columns(mutation) == {b"cf:a": b"1", b"meta:b": b"2"}


def test_open_closes_connection_when_table_lookup_fails(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A failing table lookup should not leak the Thrift transport."""

    class _BrokenTableConnection(_FakeHappyConnection):
        def table(self, name: str) -> _FakeTable:
            raise OSError(f"table {name} unavailable")

    _install_fake_happybase(monkeypatch, _BrokenTableConnection)

    with pytest.raises(StoreConnectionError):
        HBaseStoreClient().open(JobConfig(output_table="events"), "events")

    assert _FakeHappyConnection.instances[0].closed is True
