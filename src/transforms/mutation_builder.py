"""Record-to-mutation translation.

This module turns one framework record, an opaque key plus a
family -> qualifier -> cell mapping, into a single store put.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import InvalidColumnDataError, InvalidKeyError, ScalarEncodingError
from core.types import Cell, Mutation, MutationBuildResult
from transforms.byte_encoder import encode_value

COLUMN_DATA_EXPECTATION = "expected family→qualifier→value mapping of encodable scalars"


def build_mutation(key: object, value: object) -> MutationBuildResult:
    """Translate one record into a mutation.

    A null key or value yields no mutation. Null qualifier maps and null
    cells are skipped and counted. Any other malformed input fails the
    whole record, so a partial mutation is never produced.

    Args:
        key: Record key scalar.
        value: Nested column mapping.

    Returns:
        Build result holding the mutation and skip counts.

    Raises:
        InvalidKeyError: If the key cannot be encoded.
        InvalidColumnDataError: If the value is not an encodable mapping.
    """
    if key is None or value is None:
        return MutationBuildResult(mutation=None)
    row_key = _encode_row_key(key)
    cells, skipped_families, skipped_cells = _encode_columns(value)
    return MutationBuildResult(
        mutation=Mutation(row_key=row_key, cells=cells),
        skipped_families=skipped_families,
        skipped_cells=skipped_cells,
    )


def _encode_row_key(key: object) -> bytes:
    try:
        return encode_value(key)
    except ScalarEncodingError as error:
        raise InvalidKeyError(
            f"Invalid record key of type {type(key).__name__}: {error}"
        ) from error


def _encode_columns(value: object) -> tuple[tuple[Cell, ...], int, int]:
    """Encode every present family/qualifier/cell triple.

    Args:
        value: Nested column mapping.

    Returns:
        Encoded cells, skipped family count, and skipped cell count.

    Raises:
        InvalidColumnDataError: If the mapping shape or any scalar is invalid.
    """
    columns = _expect_mapping(value, "record value")
    cells: list[Cell] = []
    skipped_families = 0
    skipped_cells = 0
    for family_obj, qualifiers_obj in columns.items():
        if qualifiers_obj is None:
            skipped_families += 1
            continue
        family = _encode_column_part(family_obj, "family")
        qualifiers = _expect_mapping(qualifiers_obj, "qualifier map")
        for qualifier_obj, cell_obj in qualifiers.items():
            if cell_obj is None:
                skipped_cells += 1
                continue
            cells.append(
                Cell(
                    family=family,
                    qualifier=_encode_column_part(qualifier_obj, "qualifier"),
                    value=_encode_column_part(cell_obj, "cell value"),
                )
            )
    return tuple(cells), skipped_families, skipped_cells


def _encode_column_part(part: object, context: str) -> bytes:
    try:
        return encode_value(part)
    except ScalarEncodingError as error:
        raise InvalidColumnDataError(
            f"Couldn't encode {context}: {error}; {COLUMN_DATA_EXPECTATION}."
        ) from error


def _expect_mapping(value: object, context: str) -> Mapping[object, object]:
    if isinstance(value, Mapping):
        return value
    raise InvalidColumnDataError(
        f"Couldn't get column values: {context} is {type(value).__name__}; "
        f"{COLUMN_DATA_EXPECTATION}."
    )
