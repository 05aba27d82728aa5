"""Store client contract consumed by the record writer.

The writer depends only on these protocols, so any column-family
store client that can open a table and submit puts can back it.
"""

from __future__ import annotations

from typing import Protocol

from core.config import JobConfig
from core.types import Mutation


class StoreConnection(Protocol):
    """An open handle on one target table."""

    def set_buffered_writes(self, enabled: bool) -> None: ...

    def submit(self, mutation: Mutation) -> None: ...

    def close(self) -> None: ...


class StoreClient(Protocol):
    """Factory for table connections."""

    def open(self, config: JobConfig, table_name: str) -> StoreConnection: ...
