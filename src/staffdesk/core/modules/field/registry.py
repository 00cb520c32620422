"""Pure helpers for assembling the field list a form or import works with."""

import re
from collections.abc import Iterable

from staffdesk.core.modules.field.models import FieldDefinition

GENERATED_NAME_RE = re.compile(r"^Field_(\d+)$")


def merge_fields(admin_fields: Iterable[FieldDefinition], standard_fields: Iterable[FieldDefinition]) -> list[FieldDefinition]:
    """Admin fields followed by the standard fields they do not shadow by name."""
    merged = list(admin_fields)
    taken = {field.field_name for field in merged}
    merged.extend(field for field in standard_fields if field.field_name not in taken)
    return merged


def visible_fields(fields: Iterable[FieldDefinition]) -> list[FieldDefinition]:
    return [field for field in fields if not field.is_hidden]


def sort_fields(fields: Iterable[FieldDefinition]) -> list[FieldDefinition]:
    """Ascending by sort_order; sorted() is stable so ties keep insertion order."""
    return sorted(fields, key=lambda field: field.sort_order)


def next_field_name(fields: Iterable[FieldDefinition]) -> str:
    """Next auto-generated name: one past the highest Field_<n> suffix, starting at Field_1."""
    highest = 0
    for field in fields:
        match = GENERATED_NAME_RE.match(field.field_name)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"Field_{highest + 1}"


def get_field(fields: Iterable[FieldDefinition], field_name: str) -> FieldDefinition | None:
    """Get field definition by name."""
    for field in fields:
        if field.field_name == field_name:
            return field
    return None
