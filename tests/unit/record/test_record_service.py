"""Tests for the record form lifecycle against a mocked records API."""

import asyncio
import json

import httpx
import pytest

from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.field.standard import get_standard_fields
from staffdesk.core.modules.record.models import AuthToken
from staffdesk.core.modules.record.service import RecordService
from staffdesk.errors import ValidationError

TOKEN = AuthToken("tok-123")
STORED = {
    "id": 5,
    "first_name": "Ada",
    "email": "ada@example.com",
    "custom_fields": json.dumps({"Field_2": "true", "Field_4": "A+"}),
}


class FakeRecordsApi:
    def __init__(self, stored=None):
        self.stored = stored or STORED
        self.writes = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"jobSeeker": self.stored})
        payload = json.loads(request.content)
        self.writes.append((request.method, request.url.path, payload))
        return httpx.Response(200, json={"jobSeeker": {"id": 5, **payload}})


@pytest.fixture
def api():
    return FakeRecordsApi()


@pytest.fixture
def service(custom_form_fields, core_factory, api):
    record_service = RecordService(None)
    record_service.set_core(core_factory(custom_form_fields, api))
    return record_service


class TestGetForm:
    def test_new_form_has_no_hidden_inputs(self, service):
        form = asyncio.run(service.get_form(TOKEN, EntityType.JOB_SEEKERS))
        names = [item.field_name for item in form.inputs]
        assert names == ["firstName", "email", "phone", "Field_1", "Field_2", "Field_3", "resumeUpload"]
        assert form.record_id is None

    def test_existing_record_is_prepopulated(self, service):
        form = asyncio.run(service.get_form(TOKEN, EntityType.JOB_SEEKERS, 5))
        by_name = {item.field_name: item for item in form.inputs}

        assert form.record_id == "5"
        assert by_name["firstName"].value == "Ada"
        assert by_name["Field_2"].checked is True
        assert by_name["Field_3"].include_empty_choice is True

    def test_values_include_hidden_fields(self, service):
        values = asyncio.run(service.get_values(TOKEN, EntityType.JOB_SEEKERS, 5))
        assert values.values["Field_4"] == "A+"
        assert "resumeUpload" not in values.values


class TestSaveRecord:
    def test_create_posts_packaged_values(self, service, api):
        values = {"firstName": "Grace", "email": "grace@example.com", "Field_1": "7", "Field_2": True}
        result = asyncio.run(service.save_record(TOKEN, EntityType.JOB_SEEKERS, values))

        assert result.saved
        method, path, payload = api.writes[0]
        assert (method, path) == ("POST", "/api/job-seekers")
        assert payload["first_name"] == "Grace"
        assert payload["custom_fields"] == {"Field_1": "7", "Field_2": "true"}

    def test_update_preserves_hidden_values(self, service, api):
        values = {"firstName": "Ada L.", "email": "ada@example.com", "Field_4": "overwritten"}
        result = asyncio.run(service.save_record(TOKEN, EntityType.JOB_SEEKERS, values, record_id=5))

        assert result.saved
        method, path, payload = api.writes[0]
        assert (method, path) == ("PUT", "/api/job-seekers/5")
        assert payload["first_name"] == "Ada L."
        assert payload["custom_fields"]["Field_4"] == "A+"

    def test_checkbox_values_are_normalized(self, service, api):
        values = {"firstName": "Ada", "email": "ada@example.com", "Field_2": "no"}
        asyncio.run(service.save_record(TOKEN, EntityType.JOB_SEEKERS, values, record_id=5))
        assert api.writes[0][2]["custom_fields"]["Field_2"] == "false"

    def test_file_values_are_ignored(self, service, api):
        values = {"firstName": "Ada", "email": "ada@example.com", "resumeUpload": "cv.pdf"}
        asyncio.run(service.save_record(TOKEN, EntityType.JOB_SEEKERS, values))
        payload = api.writes[0][2]
        assert "resumeUpload" not in payload
        assert "resumeUpload" not in payload["custom_fields"]

    def test_invalid_values_are_returned_not_sent(self, service, api):
        values = {"firstName": "", "email": "not-an-email"}
        result = asyncio.run(service.save_record(TOKEN, EntityType.JOB_SEEKERS, values))

        assert not result.saved
        assert result.record is None
        assert result.validation.errors == [
            'Required field "First Name" is empty',
            'Invalid email format for "Email": not-an-email',
        ]
        assert api.writes == []

    def test_unpackageable_values_raise(self, core_factory):
        service = RecordService(None)
        api = FakeRecordsApi()
        service.set_core(core_factory(get_standard_fields(EntityType.JOBS), api))

        with pytest.raises(ValidationError, match='Field "Organization"'):
            asyncio.run(service.save_record(TOKEN, EntityType.JOBS, {"jobTitle": "Welder", "organizationId": "Acme"}))
        assert api.writes == []


class TestValidateForm:
    def test_hidden_fields_are_not_checked(self, field_factory, core_factory):
        fields = [field_factory("Field_1", "Secret", is_required=True, is_hidden=True)]
        service = RecordService(None)
        service.set_core(core_factory(fields, FakeRecordsApi()))

        result = asyncio.run(service.validate_form(EntityType.JOB_SEEKERS, {}))
        assert result.is_valid
