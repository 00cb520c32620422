"""Header-to-field mapping for CSV imports."""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field

from staffdesk.core.modules.csvio.parser import CsvTable
from staffdesk.core.modules.field.models import FieldDefinition
from staffdesk.core.modules.field.validators import validate_row
from staffdesk.core.modules.importer.aliases import aliases_for, normalize_header

FIRST_DATA_ROW = 2  # Row 1 is the header


class MappedRow(BaseModel):
    row_number: int
    mapped: dict[str, str] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def auto_map(headers: Sequence[str], fields: Sequence[FieldDefinition]) -> dict[str, str | None]:
    """Guess a field for every header; None means the column is skipped.

    Headers are matched in order and the first field whose alias matches
    wins. A field is claimed by at most one header.
    """
    field_aliases = [(field, aliases_for(field)) for field in fields]
    claimed: set[str] = set()
    mapping: dict[str, str | None] = {}

    for header in headers:
        normalized = normalize_header(header)
        mapping[header] = None
        if not normalized:
            continue
        for field, aliases in field_aliases:
            if field.field_name not in claimed and normalized in aliases:
                mapping[header] = field.field_name
                claimed.add(field.field_name)
                break

    return mapping


def apply_mapping(
    table: CsvTable, mapping: Mapping[str, str | None], fields: Sequence[FieldDefinition]
) -> list[MappedRow]:
    """Project every row onto field names and validate it. Invalid rows are kept and flagged."""
    known = {field.field_name for field in fields}
    result = []
    for index, row in enumerate(table.rows):
        mapped: dict[str, str] = {}
        for header, field_name in mapping.items():
            if field_name and field_name in known and field_name not in mapped:
                mapped[field_name] = (row.get(header) or "").strip()
        result.append(
            MappedRow(
                row_number=index + FIRST_DATA_ROW,
                mapped=mapped,
                errors=validate_row(fields, row, mapping),
            )
        )
    return result
