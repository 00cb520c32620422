from pydantic import BaseModel, Field

from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.importer.mapper import MappedRow


class ImportOptions(BaseModel):
    """How rows that match an existing record are treated."""

    skip_duplicates: bool = False
    update_existing: bool = False


class ImportPreview(BaseModel):
    """Parsed upload with the suggested mapping, shown before anything is written."""

    entity_type: EntityType
    headers: list[str]
    field_mappings: dict[str, str | None]
    rows: list[MappedRow] = Field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0


class ImportSummary(BaseModel):
    total_rows: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list, description="First per-row errors, formatted 'Row <n>: <message>'")
