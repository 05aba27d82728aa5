"""Job configuration model for Tablesink.

This module owns all property and environment variable parsing.
Other modules consume a typed config object instead of raw key lookups.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping, cast

from core.constants import (
    CLUSTER_ADDRESS_KEY,
    CLUSTER_PORT_KEY,
    DEFAULT_CLUSTER_PORT,
    DEFAULT_WRITE_BUFFER_SIZE,
    ENV_PREFIX,
    OUTPUT_TABLE_KEY,
    TABLE_PREFIX_KEY,
    WRITE_BUFFER_SIZE_KEY,
)
from core.errors import MissingTableNameError, TableSinkConfigError, TableSinkDependencyError

_ENV_PROPERTY_NAMES = {
    "OUTPUT_TABLE": OUTPUT_TABLE_KEY,
    "CLUSTER_ADDRESS": CLUSTER_ADDRESS_KEY,
    "CLUSTER_PORT": CLUSTER_PORT_KEY,
    "WRITE_BUFFER_SIZE": WRITE_BUFFER_SIZE_KEY,
    "TABLE_PREFIX": TABLE_PREFIX_KEY,
}


@dataclass(frozen=True)
class JobConfig:
    """Validated job configuration for one output job.

    The output table is kept optional here so that a missing value is
    reported by ``require_output_table`` at validation time, not at parse time.

    Attributes:
        output_table: Target table name, or None when not configured.
        cluster_address: Optional store gateway host override.
        cluster_port: Store gateway port.
        write_buffer_size: Mutations buffered client-side before a flush.
        table_prefix: Optional table-name prefix applied by the client.
    """

    output_table: str | None
    cluster_address: str | None = None
    cluster_port: int = DEFAULT_CLUSTER_PORT
    write_buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE
    table_prefix: str | None = None

    @classmethod
    def from_properties(cls, properties: Mapping[str, object]) -> "JobConfig":
        """Build config from job properties.

        Args:
            properties: Flat mapping of dotted property keys to values.

        Returns:
            A validated config object.

        Raises:
            TableSinkConfigError: If numeric properties are invalid.
        """
        return cls(
            output_table=_optional_text(properties.get(OUTPUT_TABLE_KEY)),
            cluster_address=_optional_text(properties.get(CLUSTER_ADDRESS_KEY)),
            cluster_port=_parse_positive_int(
                properties.get(CLUSTER_PORT_KEY), CLUSTER_PORT_KEY, DEFAULT_CLUSTER_PORT
            ),
            write_buffer_size=_parse_positive_int(
                properties.get(WRITE_BUFFER_SIZE_KEY),
                WRITE_BUFFER_SIZE_KEY,
                DEFAULT_WRITE_BUFFER_SIZE,
            ),
            table_prefix=_optional_text(properties.get(TABLE_PREFIX_KEY)),
        )

    @classmethod
    def from_env(cls) -> "JobConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TableSinkConfigError: If environment values are invalid.
        """
        return cls.from_properties(env_properties())


def env_properties() -> dict[str, str]:
    """Collect job properties set through ``TABLESINK_*`` variables.

    Returns:
        Mapping of property keys for the variables that are set.
    """
    properties: dict[str, str] = {}
    for env_suffix, property_key in _ENV_PROPERTY_NAMES.items():
        raw_value = os.getenv(f"{ENV_PREFIX}{env_suffix}")
        if raw_value is not None:
            properties[property_key] = raw_value
    return properties


def load_job_properties(properties_path: str) -> dict[str, object]:
    """Load a flat YAML mapping of job properties from disk.

    Args:
        properties_path: File path to a YAML properties file.

    Returns:
        Mapping of property keys to raw values.

    Raises:
        TableSinkDependencyError: If PyYAML is unavailable.
        TableSinkConfigError: If the file is missing or not a flat mapping.
    """
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise TableSinkDependencyError(
            "YAML job properties require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    properties_file = Path(properties_path).expanduser().resolve()
    if not properties_file.exists():
        raise TableSinkConfigError(
            f"Job properties file does not exist at {properties_file}. "
            "Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(properties_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise TableSinkConfigError(
            f"Failed to read job properties at {properties_file}: {error}."
        ) from error
    except yaml.YAMLError as error:
        raise TableSinkConfigError(
            f"Failed to parse YAML job properties at {properties_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise TableSinkConfigError(
            f"Invalid job properties at {properties_file}: expected mapping, "
            f"got {type(payload).__name__}."
        )
    return {str(key): value for key, value in payload.items()}


def parse_property_overrides(raw_overrides: list[str]) -> dict[str, str]:
    """Parse ``key=value`` override strings.

    Args:
        raw_overrides: Override strings from the command line.

    Returns:
        Mapping of property keys to values.

    Raises:
        TableSinkConfigError: If an override has no ``=`` or an empty key.
    """
    overrides: dict[str, str] = {}
    for raw_override in raw_overrides:
        key, separator, value = raw_override.partition("=")
        if not separator or not key.strip():
            raise TableSinkConfigError(
                f"Invalid property override '{raw_override}'. Use -D key=value."
            )
        overrides[key.strip()] = value
    return overrides


def require_output_table(config: JobConfig) -> str:
    """Return the configured output table or fail.

    Both the job pre-flight check and writer construction call this,
    so the two paths reject exactly the same configurations.

    Args:
        config: Job configuration.

    Returns:
        Output table name.

    Raises:
        MissingTableNameError: If no table name is configured.
    """
    if config.output_table is None:
        raise MissingTableNameError(
            f"Must specify table name. Set the '{OUTPUT_TABLE_KEY}' job property "
            f"or {ENV_PREFIX}OUTPUT_TABLE."
        )
    return config.output_table


def _optional_text(raw_value: object) -> str | None:
    if raw_value is None:
        return None
    text = str(raw_value).strip()
    return text or None


def _parse_positive_int(raw_value: object, key: str, default: int) -> int:
    """Parse an optional positive integer property.

    Args:
        raw_value: Raw property value.
        key: Property key for error context.
        default: Value used when the property is unset.

    Returns:
        Parsed integer.

    Raises:
        TableSinkConfigError: If value is not a positive integer.
    """
    if raw_value is None or (isinstance(raw_value, str) and not raw_value.strip()):
        return default
    if isinstance(raw_value, bool):
        raise TableSinkConfigError(f"Invalid {key} value: expected integer, got boolean.")
    try:
        value = int(str(raw_value).strip())
    except ValueError as error:
        raise TableSinkConfigError(
            f"Invalid {key} value: expected integer, got '{raw_value}'. "
            f"Set {key} to a numeric value."
        ) from error
    if value <= 0:
        raise TableSinkConfigError(f"Invalid {key} value: expected positive integer, got {value}.")
    return value
