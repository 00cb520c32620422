"""Builds the record payload the persistence API expects from a value store."""

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from staffdesk.core.modules.field.models import EntityType, FieldDefinition, FieldType
from staffdesk.core.modules.field.validators import parse_number
from staffdesk.core.modules.submission.columns import Column, ColumnKind, column_for
from staffdesk.core.modules.submission.models import Err, Ok, Result, Submission

_JSON_SCALARS = (str, int, float, bool, type(None))
WHOLE_NUMBER_RE = re.compile(r"^[+-]?\d+$")


def coerce(column: Column, value: str) -> Result[Any]:
    """Convert a trimmed, non-empty value to the column's wire type."""
    match column.kind:
        case ColumnKind.INTEGER:
            if not WHOLE_NUMBER_RE.match(value):
                return Err(f"expected a whole number, got {value!r}")
            return Ok(int(value))
        case ColumnKind.COUNT:
            number = parse_number(value)
            if number is None:
                return Err(f"expected a number, got {value!r}")
            return Ok(int(number))
        case ColumnKind.NUMBER:
            number = parse_number(value)
            if number is None:
                return Err(f"expected a number, got {value!r}")
            return Ok(int(number) if number.is_integer() else number)
        case _:
            return Ok(value)


def package(entity_type: EntityType, values: Mapping[str, str], fields: Iterable[FieldDefinition]) -> Result[Submission]:
    """Split values into typed columns and a custom_fields object keyed by field_name.

    Hidden fields are packaged like any other. File fields never are.
    Blank values are omitted unless their column is nullable, then they are null.
    """
    submission = Submission()

    for field in fields:
        if field.field_type == FieldType.FILE:
            continue
        value = (values.get(field.field_name) or "").strip()
        column = column_for(entity_type, field)

        if column is None:
            if value:
                submission.custom_fields[field.field_name] = value
            continue

        # Two fields mapping to one column: first non-blank value wins
        if submission.columns.get(column.name) is not None:
            continue
        if not value:
            if column.nullable:
                submission.columns[column.name] = None
            continue
        result = coerce(column, value)
        if isinstance(result, Err):
            return Err(f'Field "{field.field_label}": {result.reason}')
        submission.columns[column.name] = result.value

    return check(submission)


def check(submission: Submission) -> Result[Submission]:
    """Reject payloads the persistence API would choke on."""
    if not isinstance(submission.custom_fields, dict):
        return Err("custom_fields must be an object")
    if "custom_fields" in submission.columns:
        return Err("custom_fields cannot also be a column")
    for key, value in (*submission.columns.items(), *submission.custom_fields.items()):
        if not isinstance(key, str):
            return Err(f"Non-string key: {key!r}")
        if not isinstance(value, _JSON_SCALARS):
            return Err(f"Value for {key} is not a JSON scalar")
        if isinstance(value, float) and not math.isfinite(value):
            return Err(f"Value for {key} is not finite")
    return Ok(submission)
