"""Tests for export flattening, filtering and file rendering."""

import io
from datetime import date

from openpyxl import load_workbook

from staffdesk.core.modules.export.formatting import (
    build_table,
    build_template,
    flatten_record,
    matches_filters,
    select_fields,
    template_filename,
    to_csv,
    to_xlsx,
)
from staffdesk.core.modules.export.models import ExportFilters
from staffdesk.core.modules.field.models import EntityType


class TestFlattenRecord:
    def test_nested_objects_use_underscores(self):
        record = {"id": 1, "owner": {"name": "Sam", "team": {"code": "NE"}}}
        assert flatten_record(record) == {"id": 1, "owner_name": "Sam", "owner_team_code": "NE"}

    def test_arrays_are_joined(self):
        assert flatten_record({"skills": ["Excel", "SQL", None]}) == {"skills": "Excel; SQL; "}

    def test_custom_fields_string_is_expanded(self):
        record = {"id": 1, "custom_fields": '{"Field_1": "9", "Field_2": "true"}'}
        assert flatten_record(record) == {"id": 1, "custom_fields_Field_1": "9", "custom_fields_Field_2": "true"}

    def test_empty_custom_fields_vanish(self):
        assert flatten_record({"id": 1, "custom_fields": ""}) == {"id": 1}


class TestSelectFields:
    def test_dotted_paths(self):
        record = {"id": 1, "email": "a@b.co", "custom_fields": '{"Field_1": "9"}'}
        assert select_fields(record, ["email", "custom_fields.Field_1"]) == {
            "email": "a@b.co",
            "custom_fields.Field_1": "9",
        }

    def test_missing_paths_are_left_out(self):
        assert select_fields({"id": 1}, ["id", "nope", "id.deeper"]) == {"id": 1}


class TestMatchesFilters:
    def test_inclusive_day_bounds(self):
        filters = ExportFilters(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))
        assert matches_filters({"created_at": "2024-03-01T00:00:00Z"}, filters)
        assert matches_filters({"created_at": "2024-03-31T23:59:59Z"}, filters)
        assert not matches_filters({"created_at": "2024-04-01T00:00:00Z"}, filters)
        assert not matches_filters({"created_at": "2024-02-29"}, filters)

    def test_falls_back_to_date_added(self):
        filters = ExportFilters(start_date=date(2024, 3, 1))
        assert not matches_filters({"date_added": "2024-01-10"}, filters)

    def test_undated_records_pass(self):
        filters = ExportFilters(start_date=date(2024, 3, 1))
        assert matches_filters({"id": 1}, filters)
        assert matches_filters({"created_at": "not a date"}, filters)

    def test_status_is_case_insensitive(self):
        filters = ExportFilters(status="active")
        assert matches_filters({"status": "Active"}, filters)
        assert not matches_filters({"status": "Placed"}, filters)
        assert not matches_filters({}, filters)


class TestBuildTable:
    def test_union_of_headers_in_first_seen_order(self):
        headers, rows = build_table([{"id": 1, "name": "Acme"}, {"id": 2, "website": "acme.test"}])
        assert headers == ["id", "name", "website"]
        assert rows == [[1, "Acme", None], [2, None, "acme.test"]]

    def test_no_records(self):
        assert build_table([]) == ([], [])


class TestRendering:
    def test_csv_starts_with_bom(self):
        content = to_csv(["id", "name"], [[1, None]])
        assert content.startswith("\ufeff".encode())
        assert content.decode("utf-8") == '\ufeff"id","name"\r\n"1",""\r\n'

    def test_xlsx_is_readable(self):
        content = to_xlsx(["id", "name"], [[1, "Acme"], [2, "Globex"]], title="Organization")
        worksheet = load_workbook(io.BytesIO(content)).active

        assert worksheet.title == "Organization"
        assert [cell.value for cell in worksheet[1]] == ["id", "name"]
        assert worksheet["A1"].font.bold
        assert worksheet["B3"].value == "Globex"

    def test_xlsx_caps_column_width(self):
        content = to_xlsx(["notes"], [["x" * 200]], title="Task")
        worksheet = load_workbook(io.BytesIO(content)).active
        assert worksheet.column_dimensions["A"].width == 50


class TestTemplate:
    def test_visible_labels_only(self, custom_form_fields):
        template = build_template(custom_form_fields)
        assert not template.startswith("\ufeff")
        assert template == (
            '"First Name","Email","Phone","Shoe Size","Relocate","Source","Upload Resume"\r\n'
        )

    def test_filename(self):
        assert template_filename(EntityType.JOB_SEEKERS) == "Job_Seeker_Template.csv"
        assert template_filename(EntityType.HIRING_MANAGERS) == "Hiring_Manager_Template.csv"
