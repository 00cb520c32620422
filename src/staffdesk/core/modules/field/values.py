"""Per-form value store: field_name -> raw string, coerced only at packaging time."""

import json
from collections.abc import Iterable, Mapping
from typing import Any, Self

import structlog

from staffdesk.core.modules.field.models import EntityType, FieldDefinition, FieldType
from staffdesk.core.modules.submission.columns import ColumnKind, column_for

logger = structlog.get_logger(__name__)


def parse_custom_fields(raw: Any) -> dict[str, Any]:
    """custom_fields arrives either as an object or as a JSON-encoded string."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str) and raw.strip():
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("custom_fields_unparseable", preview=raw[:80])
            return {}
        if isinstance(parsed, dict):
            return parsed
    return {}


def to_form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


class FieldValueStore:
    """Mutable mapping of the values a form currently holds.

    File fields are never stored.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    @classmethod
    def for_new_record(cls, fields: Iterable[FieldDefinition]) -> Self:
        """Empty store seeded with each field's default value."""
        return cls(
            {
                field.field_name: field.default_value or ""
                for field in fields
                if field.field_type != FieldType.FILE
            }
        )

    @classmethod
    def from_record(
        cls, entity_type: EntityType, fields: Iterable[FieldDefinition], record: Mapping[str, Any]
    ) -> Self:
        """Populate from a stored record.

        Each field reads its top-level column when it has one, then the
        custom_fields blob by field_name, then by label for values saved
        before keys were unified.
        """
        custom = parse_custom_fields(record.get("custom_fields"))
        store = cls()
        for field in fields:
            if field.field_type == FieldType.FILE:
                continue
            value = ""
            column = column_for(entity_type, field)
            if column is not None and record.get(column.name) is not None:
                value = to_form_value(record[column.name])
                if column.kind == ColumnKind.DATE:
                    value = value.split("T", 1)[0]
            if not value:
                raw = custom.get(field.field_name, custom.get(field.field_label))
                value = to_form_value(raw)
            store._values[field.field_name] = value
        return store

    def get(self, field_name: str) -> str:
        return self._values.get(field_name, "")

    def set(self, field_name: str, value: str) -> None:
        self._values[field_name] = value

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._values
