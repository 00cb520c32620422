from typing import Any, NewType

from pydantic import BaseModel, Field

from staffdesk.core.modules.field.models import EntityType, ValidationResult
from staffdesk.core.modules.field.renderer import InputDescriptor

AuthToken = NewType("AuthToken", str)

# Record ids are whatever the persistence API issues (usually integers)
type RecordId = int | str
type RecordData = dict[str, Any]


class RecordValues(BaseModel):
    """A record's form values keyed by field name."""

    entity_type: EntityType
    record_id: str | None = None
    values: dict[str, str] = Field(default_factory=dict)


class RecordForm(BaseModel):
    """Rendered inputs for a new or existing record, in display order."""

    entity_type: EntityType
    record_id: str | None = None
    inputs: list[InputDescriptor] = Field(default_factory=list)


class SaveResult(BaseModel):
    """Outcome of a form submission. Validation failures are returned, not raised."""

    saved: bool
    record: RecordData | None = None
    validation: ValidationResult
