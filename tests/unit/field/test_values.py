"""Tests for the per-form value store."""

from staffdesk.core.modules.field.models import EntityType, FieldType
from staffdesk.core.modules.field.values import FieldValueStore, parse_custom_fields


class TestNewRecord:
    def test_seeded_with_defaults(self, field_factory):
        fields = [field_factory("status", default_value="New lead"), field_factory("city")]
        store = FieldValueStore.for_new_record(fields)
        assert store.as_dict() == {"status": "New lead", "city": ""}

    def test_file_fields_are_not_stored(self, field_factory):
        store = FieldValueStore.for_new_record([field_factory("resumeUpload", field_type=FieldType.FILE)])
        assert "resumeUpload" not in store


class TestFromRecord:
    """Existing records populate from columns first, then custom_fields."""

    def test_columns_and_custom_fields(self, custom_form_fields):
        record = {
            "id": 7,
            "first_name": "Ada",
            "email": "ada@example.com",
            "phone": None,
            "custom_fields": {"Field_1": "9", "Field_4": "A+"},
        }
        store = FieldValueStore.from_record(EntityType.JOB_SEEKERS, custom_form_fields, record)
        assert store.get("firstName") == "Ada"
        assert store.get("email") == "ada@example.com"
        assert store.get("phone") == ""
        assert store.get("Field_1") == "9"
        assert store.get("Field_4") == "A+"

    def test_custom_fields_as_json_string(self, field_factory):
        fields = [field_factory("Field_1", "Shoe Size")]
        store = FieldValueStore.from_record(EntityType.JOB_SEEKERS, fields, {"custom_fields": '{"Field_1": "9"}'})
        assert store.get("Field_1") == "9"

    def test_label_keyed_values_still_load(self, field_factory):
        fields = [field_factory("Field_1", "Shoe Size")]
        store = FieldValueStore.from_record(EntityType.JOB_SEEKERS, fields, {"custom_fields": {"Shoe Size": 9}})
        assert store.get("Field_1") == "9"

    def test_date_columns_drop_time(self, field_factory):
        fields = [field_factory("dateAdded", "Date Added", FieldType.DATE)]
        store = FieldValueStore.from_record(EntityType.JOB_SEEKERS, fields, {"date_added": "2024-03-01T00:00:00.000Z"})
        assert store.get("dateAdded") == "2024-03-01"

    def test_integer_columns_become_strings(self, field_factory):
        fields = [field_factory("jobId", "Job", entity_type=EntityType.PLACEMENTS)]
        store = FieldValueStore.from_record(EntityType.PLACEMENTS, fields, {"job_id": 12})
        assert store.get("jobId") == "12"


class TestParseCustomFields:
    def test_garbage_gives_empty_dict(self):
        assert parse_custom_fields("{not json") == {}
        assert parse_custom_fields("[1, 2]") == {}
        assert parse_custom_fields(5) == {}
        assert parse_custom_fields(None) == {}
