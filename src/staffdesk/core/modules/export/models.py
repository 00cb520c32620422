"""Export request and file models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field


class ExportFormat(StrEnum):
    CSV = "csv"
    XLSX = "xlsx"

    @property
    def media_type(self) -> str:
        if self == ExportFormat.XLSX:
            return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        return "text/csv; charset=utf-8"


class ExportFilters(BaseModel):
    start_date: date | None = Field(None, description="Keep records created on or after this day")
    end_date: date | None = Field(None, description="Keep records created on or before this day")
    status: str | None = Field(None, description="Case-insensitive status match")


class ExportRequest(BaseModel):
    format: ExportFormat = ExportFormat.CSV
    filters: ExportFilters = Field(default_factory=ExportFilters)
    selected_fields: list[str] | None = Field(
        None, description="Record keys to keep; dotted paths reach into nested objects, e.g. custom_fields.Field_1"
    )


@dataclass(frozen=True)
class ExportFile:
    filename: str
    media_type: str
    content: bytes
