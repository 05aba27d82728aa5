"""Tablesink CLI entry points.

This module exposes the job pre-flight check and a typed-bytes loader.
It maps argparse commands onto output format calls.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from core.config import (
    JobConfig,
    env_properties,
    load_job_properties,
    parse_property_overrides,
)
from core.errors import TableSinkConfigError, TableSinkError
from ingest.typedbytes_reader import read_typedbytes_records
from store.hbase_client import HBaseStoreClient
from store.output_format import check_output_specs, run_output_task


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="tablesink",
        description="Write typed-bytes reduce output into an HBase table",
    )
    parser.add_argument("--conf", help="YAML file of job properties")
    parser.add_argument(
        "-D",
        dest="properties",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set a job property, e.g. -D output.table=events",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Validate job output settings")
    load_parser = subparsers.add_parser("load", help="Write typed-bytes records to the table")
    load_parser.add_argument(
        "--input",
        default="-",
        help="Typed-bytes input file, or '-' for stdin",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tablesink CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except TableSinkConfigError as error:
        print(f"config_error={error}")
        return 1
    if args.command == "check":
        return _run_check_command(config)
    if args.command == "load":
        return _run_load_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> JobConfig:
    """Merge environment, file, and command-line properties.

    Later sources win: environment, then ``--conf``, then ``-D``.
    """
    properties: dict[str, object] = dict(env_properties())
    if args.conf:
        properties.update(load_job_properties(args.conf))
    properties.update(parse_property_overrides(args.properties))
    return JobConfig.from_properties(properties)


def _run_check_command(config: JobConfig) -> int:
    try:
        table_name = check_output_specs(config)
    except TableSinkConfigError as error:
        print(f"config_error={error}")
        return 1
    print(f"output_table={table_name}")
    return 0


def _run_load_command(config: JobConfig, args: argparse.Namespace) -> int:
    """Handle load command.

    Args:
        config: Job configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        check_output_specs(config)
        if args.input == "-":
            stats = run_output_task(
                read_typedbytes_records(sys.stdin.buffer), config, HBaseStoreClient()
            )
        else:
            with Path(args.input).expanduser().open("rb") as input_stream:
                stats = run_output_task(
                    read_typedbytes_records(input_stream), config, HBaseStoreClient()
                )
    except TableSinkConfigError as error:
        print(f"config_error={error}")
        return 1
    except TableSinkError as error:
        print(f"write_error={error}")
        return 1
    except OSError as error:
        print(f"input_error={error}")
        return 1
    for name, count in stats.as_dict().items():
        print(f"{name}={count}")
    return 0
