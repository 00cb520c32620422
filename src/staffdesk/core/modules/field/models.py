"""Field system for admin-configurable record schemas."""

import json
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from staffdesk.core.db import MongoModel
from staffdesk.utils import now


class EntityType(StrEnum):
    """Record kinds that own their own field namespace."""

    ORGANIZATIONS = "organizations"
    JOBS = "jobs"
    JOB_SEEKERS = "job-seekers"
    HIRING_MANAGERS = "hiring-managers"
    PLACEMENTS = "placements"
    LEADS = "leads"
    TASKS = "tasks"

    @property
    def record_type(self) -> str:
        """Singular display name, e.g. 'Job Seeker' for job-seekers."""
        singular = self.value[:-1] if self.value.endswith("s") else self.value
        return " ".join(part.capitalize() for part in singular.split("-"))


class FieldType(StrEnum):
    """Available input types for custom fields."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    NUMBER = "number"
    DATE = "date"
    TEXTAREA = "textarea"
    SELECT = "select"  # Single choice from options, with an empty choice
    CHECKBOX = "checkbox"  # Stored as "true"/"false"
    RADIO = "radio"  # Single choice from options, no empty choice
    URL = "url"
    FILE = "file"  # Rendered only, never stored in the value store


CHOICE_FIELD_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO})


def normalize_options(raw: Any) -> list[str]:
    """Coerce the option shapes admins have stored over time into a list of strings.

    Accepts a list, a JSON-encoded list, a newline-delimited string or a mapping
    whose values are the options. Blank entries are dropped.
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return [item.strip() for item in raw if isinstance(item, str) and item.strip()]
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except ValueError:
            return [line.strip() for line in text.splitlines() if line.strip()]
        if isinstance(parsed, list):
            return normalize_options(parsed)
        return [text]
    if isinstance(raw, dict):
        return normalize_options(list(raw.values()))
    return []


class FieldDefinition(MongoModel):
    """Field definition for one entity type.

    Indexed on (entity_type, field_name) - unique.
    """

    entity_type: EntityType
    field_name: str = Field(..., description="Machine-readable key, unique within the entity type")
    field_label: str = Field(..., description="Human-readable display name")
    field_type: FieldType = FieldType.TEXT
    is_required: bool = False
    is_hidden: bool = False
    options: list[str] = Field(default_factory=list, description="Choices for select/radio fields")
    placeholder: str | None = None
    default_value: str | None = None
    sort_order: int = 0
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime | None = None

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> list[str]:
        return normalize_options(value)


class FieldCreate(BaseModel):
    """Admin request to create a field. field_name is generated when omitted."""

    field_name: str | None = None
    field_label: str
    field_type: FieldType = FieldType.TEXT
    is_required: bool = False
    is_hidden: bool = False
    options: list[str] = Field(default_factory=list)
    placeholder: str | None = None
    default_value: str | None = None
    sort_order: int | None = None

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> list[str]:
        return normalize_options(value)


class FieldUpdate(BaseModel):
    """Admin request to update a field (partial). field_name cannot change."""

    field_label: str | None = None
    field_type: FieldType | None = None
    is_required: bool | None = None
    is_hidden: bool | None = None
    options: list[str] | None = None
    placeholder: str | None = None
    default_value: str | None = None
    sort_order: int | None = None

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> list[str] | None:
        if value is None:
            return None
        return normalize_options(value)


class ValidationResult(BaseModel):
    """Outcome of validating a form's values."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class FieldHistoryAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class FieldHistoryEntry(MongoModel):
    """Audit trail entry for a field definition change.

    Indexed on (field_id, performed_at).
    """

    field_id: UUID
    action: FieldHistoryAction
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    changed_fields: list[str] = Field(default_factory=list)
    performed_at: datetime = Field(default_factory=now)
