"""Record flattening and file rendering for exports."""

import io
import json
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font

from staffdesk.core.modules.csvio.writer import write_csv
from staffdesk.core.modules.export.models import ExportFilters
from staffdesk.core.modules.field.models import EntityType, FieldDefinition
from staffdesk.core.modules.field.values import parse_custom_fields

ARRAY_SEPARATOR = "; "
KEY_SEPARATOR = "_"
DATE_KEYS = ("created_at", "updated_at", "date_added")
MAX_COLUMN_WIDTH = 50


def _expand(value: Any, key: str) -> Any:
    if key == "custom_fields" and isinstance(value, str):
        return parse_custom_fields(value)
    return value


def _cell(value: Any) -> Any:
    if isinstance(value, list):
        return ARRAY_SEPARATOR.join(
            json.dumps(item) if isinstance(item, (dict, list)) else "" if item is None else str(item) for item in value
        )
    return value


def flatten_record(record: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested objects into '_'-joined keys and join arrays with '; '."""
    flat: dict[str, Any] = {}
    for key, raw in record.items():
        value = _expand(raw, key)
        full_key = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_record(value, full_key))
        else:
            flat[full_key] = _cell(value)
    return flat


def select_fields(record: dict[str, Any], paths: Sequence[str]) -> dict[str, Any]:
    """Project a record onto dotted paths. Paths that resolve to nothing are left out."""
    selected: dict[str, Any] = {}
    for path in paths:
        value: Any = record
        found = True
        for part in path.split("."):
            if isinstance(value, dict) and part in value:
                value = _expand(value[part], part)
            else:
                found = False
                break
        if found:
            selected[path] = value
    return selected


def _record_day(record: dict[str, Any]) -> date | None:
    for key in DATE_KEYS:
        raw = record.get(key)
        if not raw:
            continue
        try:
            return datetime.fromisoformat(str(raw).replace("Z", "+00:00")).date()
        except ValueError:
            continue
    return None


def matches_filters(record: dict[str, Any], filters: ExportFilters) -> bool:
    """Date bounds are inclusive days. Records without a usable date pass the date filter."""
    if filters.start_date or filters.end_date:
        day = _record_day(record)
        if day is not None:
            if filters.start_date and day < filters.start_date:
                return False
            if filters.end_date and day > filters.end_date:
                return False
    if filters.status:
        status = str(record.get("status") or record.get("Status") or "")
        if status.lower() != filters.status.lower():
            return False
    return True


def build_table(records: Iterable[dict[str, Any]]) -> tuple[list[str], list[list[Any]]]:
    """Headers are the union of keys in first-seen order."""
    flat_records = [flatten_record(record) for record in records]
    headers: list[str] = []
    seen: set[str] = set()
    for flat in flat_records:
        for key in flat:
            if key not in seen:
                seen.add(key)
                headers.append(key)
    rows = [[flat.get(header) for header in headers] for flat in flat_records]
    return headers, rows


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> bytes:
    return write_csv(headers, rows, bom=True).encode("utf-8")


def to_xlsx(headers: Sequence[str], rows: Iterable[Sequence[Any]], title: str) -> bytes:
    """Single-sheet workbook with a bold header row."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = title[:31]  # Excel sheet name limit

    for col_num, header in enumerate(headers, 1):
        worksheet.cell(row=1, column=col_num, value=header).font = Font(bold=True)
    for row_num, row in enumerate(rows, 2):
        for col_num, value in enumerate(row, 1):
            worksheet.cell(row=row_num, column=col_num, value=value)

    for column in worksheet.columns:
        width = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        worksheet.column_dimensions[column[0].column_letter].width = min(width + 2, MAX_COLUMN_WIDTH)

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_template(fields: Iterable[FieldDefinition]) -> str:
    """Header row of visible field labels for users to fill in."""
    return write_csv([field.field_label for field in fields if not field.is_hidden], [], bom=False)


def template_filename(entity_type: EntityType) -> str:
    return f"{entity_type.record_type.replace(' ', '_')}_Template.csv"
