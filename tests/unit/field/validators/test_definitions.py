"""Tests for admin field definition checks."""

import pytest

from staffdesk.core.modules.field.models import FieldType
from staffdesk.core.modules.field.validators import get_validator
from staffdesk.errors import ValidationError


class TestDefinitionValidation:
    def test_valid_text_field(self, field_factory):
        field = field_factory("Field_1", "Nickname")
        assert get_validator(field.field_type).validate_field_definition(field) is field

    @pytest.mark.parametrize("name", ["1field", "first name", "first-name", "_hidden", ""])
    def test_invalid_names(self, field_factory, name):
        field = field_factory("placeholder", "Label")
        field.field_name = name
        with pytest.raises(ValidationError, match="Invalid field name"):
            get_validator(field.field_type).validate_field_definition(field)

    def test_blank_label(self, field_factory):
        field = field_factory("Field_1", "   ")
        with pytest.raises(ValidationError, match="must have a label"):
            get_validator(field.field_type).validate_field_definition(field)

    @pytest.mark.parametrize("field_type", [FieldType.SELECT, FieldType.RADIO])
    def test_choice_fields_need_options(self, field_factory, field_type):
        field = field_factory("Field_1", "Pick", field_type)
        with pytest.raises(ValidationError, match="must have at least one option"):
            get_validator(field_type).validate_field_definition(field)

    def test_duplicate_options(self, field_factory):
        field = field_factory("Field_1", "Pick", FieldType.SELECT, options=["a", "a"])
        with pytest.raises(ValidationError, match="duplicate options"):
            get_validator(FieldType.SELECT).validate_field_definition(field)

    def test_every_type_has_a_validator(self):
        for field_type in FieldType:
            assert get_validator(field_type) is not None
