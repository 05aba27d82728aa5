"""Core constants used across Tablesink modules.

This module centralizes configuration keys and encoding widths.
Keeping values here avoids magic literals in translation logic.
"""

from __future__ import annotations

OUTPUT_TABLE_KEY = "output.table"
CLUSTER_ADDRESS_KEY = "store.cluster.address"
CLUSTER_PORT_KEY = "store.cluster.port"
WRITE_BUFFER_SIZE_KEY = "store.write.buffer_size"
TABLE_PREFIX_KEY = "store.table.prefix"
DEFAULT_CLUSTER_ADDRESS = "localhost"
DEFAULT_CLUSTER_PORT = 9090
DEFAULT_WRITE_BUFFER_SIZE = 1000
DEFAULT_LOG_LEVEL = "INFO"
ENV_PREFIX = "TABLESINK_"
HBASE_TRUE_BYTE = b"\xff"
HBASE_FALSE_BYTE = b"\x00"
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
# finite doubles at or above this round to infinity when packed as float32
FLOAT32_OVERFLOW_THRESHOLD = 2.0**128 - 2.0**103
COLUMN_SEPARATOR = b":"
