"""Shared pytest fixtures."""

from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from staffdesk.core.modules.field.models import EntityType, FieldDefinition, FieldType
from staffdesk.core.modules.field.standard import get_standard_fields
from staffdesk.core.modules.record.gateway import RecordGateway

RECORDS_API_URL = "http://records.test"


def make_field(field_name: str, field_label: str | None = None, field_type: FieldType = FieldType.TEXT, **kwargs: Any) -> FieldDefinition:
    """Build a field definition with sensible defaults."""
    return FieldDefinition(
        entity_type=kwargs.pop("entity_type", EntityType.JOB_SEEKERS),
        field_name=field_name,
        field_label=field_label or field_name,
        field_type=field_type,
        **kwargs,
    )


class StubFieldService:
    """Stands in for FieldService.load_fields without a database."""

    def __init__(self, fields: list[FieldDefinition]) -> None:
        self.fields = fields

    async def load_fields(self, entity_type: EntityType, include_hidden: bool = False) -> list[FieldDefinition]:
        return [field for field in self.fields if include_hidden or not field.is_hidden]


def make_core(fields: list[FieldDefinition], handler: Any, import_error_limit: int = 20) -> SimpleNamespace:
    """A Core look-alike: config, records gateway on a mock transport, stub field service."""
    return SimpleNamespace(
        config=SimpleNamespace(import_error_limit=import_error_limit),
        records=RecordGateway(RECORDS_API_URL, transport=httpx.MockTransport(handler)),
        services=SimpleNamespace(field=StubFieldService(fields)),
    )


@pytest.fixture
def job_seeker_fields():
    """Standard job seeker fields (firstName, lastName and email required)."""
    return get_standard_fields(EntityType.JOB_SEEKERS)


@pytest.fixture
def custom_form_fields():
    """A small form mixing standard columns, custom fields and a hidden field."""
    return [
        make_field("firstName", "First Name", is_required=True, sort_order=0),
        make_field("email", "Email", FieldType.EMAIL, is_required=True, sort_order=10),
        make_field("phone", "Phone", FieldType.PHONE, sort_order=20),
        make_field("Field_1", "Shoe Size", FieldType.NUMBER, sort_order=30),
        make_field("Field_2", "Relocate", FieldType.CHECKBOX, sort_order=40),
        make_field("Field_3", "Source", FieldType.SELECT, options=["Referral", "Job Board"], sort_order=50),
        make_field("Field_4", "Internal Rating", is_hidden=True, sort_order=60),
        make_field("resumeUpload", "Upload Resume", FieldType.FILE, sort_order=70),
    ]


@pytest.fixture
def field_factory():
    return make_field


@pytest.fixture
def core_factory():
    return make_core
