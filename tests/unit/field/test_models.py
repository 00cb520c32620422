"""Tests for field model helpers."""

import pytest

from staffdesk.core.modules.field.models import EntityType, FieldType, normalize_options


class TestNormalizeOptions:
    """Options arrive as lists, JSON strings, newline strings or mappings."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (["A", " B ", "", 3], ["A", "B"]),
            ('["Open", "Closed"]', ["Open", "Closed"]),
            ("Open\nClosed\n\n", ["Open", "Closed"]),
            ({"a": "Open", "b": "Closed"}, ["Open", "Closed"]),
            ("Single", ["Single"]),
            (None, []),
            ("", []),
            (42, []),
        ],
    )
    def test_shapes(self, raw, expected):
        assert normalize_options(raw) == expected

    def test_field_definition_normalizes_on_load(self, field_factory):
        field = field_factory("Field_1", field_type=FieldType.SELECT, options='["x", "y"]')
        assert field.options == ["x", "y"]


class TestEntityType:
    @pytest.mark.parametrize(
        ("entity_type", "record_type"),
        [
            (EntityType.JOB_SEEKERS, "Job Seeker"),
            (EntityType.HIRING_MANAGERS, "Hiring Manager"),
            (EntityType.ORGANIZATIONS, "Organization"),
            (EntityType.TASKS, "Task"),
        ],
    )
    def test_record_type(self, entity_type, record_type):
        assert entity_type.record_type == record_type
