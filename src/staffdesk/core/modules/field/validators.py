"""Field validator implementations using ABC pattern."""

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import datetime
from email.utils import parsedate_to_datetime

from staffdesk import utils
from staffdesk.core.modules.field.models import (
    CHOICE_FIELD_TYPES,
    FieldDefinition,
    FieldType,
    ValidationResult,
)
from staffdesk.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_STRIP_RE = re.compile(r"[\s\-\(\)\.]")
PHONE_RE = re.compile(r"^\+?[0-9]{10,15}$")
DATE_RES = (
    re.compile(r"^\d{4}-\d{2}-\d{2}$"),  # YYYY-MM-DD
    re.compile(r"^\d{2}/\d{2}/\d{4}$"),  # MM/DD/YYYY
    re.compile(r"^\d{2}-\d{2}-\d{4}$"),  # MM-DD-YYYY
)
# Fallback formats tried after ISO-8601
GENERIC_DATE_FORMATS = (
    "%m/%d/%Y",  # Single-digit month or day, e.g. 3/1/2024
    "%m-%d-%Y",
    "%Y/%m/%d",
    "%m/%d/%y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
)


class FieldValidator(ABC):
    """Abstract base class for field validators."""

    @abstractmethod
    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        """Check a non-empty, trimmed value.

        Args:
            field: The field definition the value belongs to
            value: The trimmed value, never empty

        Returns:
            A human-readable error message, or None if the value is acceptable
        """

    def validate_field_definition(self, field: FieldDefinition) -> FieldDefinition:
        """Validate a field definition before it is stored.

        Template method that validates name and label first, then delegates
        to subclass for type-specific validation.

        Raises:
            ValidationError: If the field definition is invalid
        """
        if not utils.is_field_name(field.field_name):
            raise ValidationError(f"Invalid field name: {field.field_name}")
        if not field.field_label.strip():
            raise ValidationError(f"Field '{field.field_name}' must have a label")

        return self._validate_type_specific_field_definition(field)

    def _validate_type_specific_field_definition(self, field: FieldDefinition) -> FieldDefinition:
        return field


class TextValidator(FieldValidator):
    """Validator for free-text fields (text, textarea, url, checkbox, file)."""

    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        return None


class EmailValidator(FieldValidator):
    """Validator for email fields."""

    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        if EMAIL_RE.match(value):
            return None
        return f'Invalid email format for "{field.field_label}": {value}'


class PhoneValidator(FieldValidator):
    """Validator for phone fields. Separators are ignored, 10-15 digits required."""

    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        if PHONE_RE.match(PHONE_STRIP_RE.sub("", value)):
            return None
        return f'Invalid phone number for "{field.field_label}": {value}'


class DateValidator(FieldValidator):
    """Validator for date fields."""

    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        if any(pattern.match(value) for pattern in DATE_RES) or parse_generic_date(value) is not None:
            return None
        return f'Invalid date for "{field.field_label}": {value}'


class NumberValidator(FieldValidator):
    """Validator for number fields."""

    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        if parse_number(value) is None:
            return f'Invalid number for "{field.field_label}": {value}'
        return None


class ChoiceValidator(FieldValidator):
    """Validator for select and radio fields."""

    def check_value(self, field: FieldDefinition, value: str) -> str | None:
        return None

    def _validate_type_specific_field_definition(self, field: FieldDefinition) -> FieldDefinition:
        if not field.options:
            raise ValidationError(f"{field.field_type.capitalize()} field '{field.field_name}' must have at least one option")
        if len(set(field.options)) != len(field.options):
            raise ValidationError(f"Field '{field.field_name}' has duplicate options")
        return field


def parse_number(value: str) -> float | None:
    """Finite number from a trimmed string, or None. Digit-group underscores are not accepted."""
    if "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_generic_date(value: str) -> datetime | None:
    """Best-effort parse of a written date; None when nothing fits."""
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in GENERIC_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)  # noqa: DTZ007
        except ValueError:
            continue
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None


# Validator registry - singleton instances
_VALIDATORS: dict[FieldType, FieldValidator] = {
    FieldType.TEXT: TextValidator(),
    FieldType.TEXTAREA: TextValidator(),
    FieldType.URL: TextValidator(),
    FieldType.CHECKBOX: TextValidator(),
    FieldType.FILE: TextValidator(),
    FieldType.EMAIL: EmailValidator(),
    FieldType.PHONE: PhoneValidator(),
    FieldType.DATE: DateValidator(),
    FieldType.NUMBER: NumberValidator(),
    FieldType.SELECT: ChoiceValidator(),
    FieldType.RADIO: ChoiceValidator(),
}

assert set(_VALIDATORS) == set(FieldType)  # noqa: S101
assert CHOICE_FIELD_TYPES <= set(_VALIDATORS)  # noqa: S101


def get_validator(field_type: FieldType) -> FieldValidator:
    """Get the validator for a given field type.

    Raises:
        ValidationError: If the field type is unknown
    """
    if field_type not in _VALIDATORS:
        raise ValidationError(f"Unknown field type: {field_type}")
    return _VALIDATORS[field_type]


def _check_field(field: FieldDefinition, raw_value: str | None, unmapped_message: bool = False) -> str | None:
    value = (raw_value or "").strip()
    if not value:
        if field.is_required and field.field_type != FieldType.FILE:
            state = "is not mapped" if unmapped_message else "is empty"
            return f'Required field "{field.field_label}" {state}'
        return None
    return get_validator(field.field_type).check_value(field, value)


def validate(fields: Iterable[FieldDefinition], values: Mapping[str, str]) -> ValidationResult:
    """Validate a form's values against its visible fields.

    Hidden fields are never checked. Runs synchronously and caches nothing.
    """
    errors: list[str] = []
    for field in fields:
        if field.is_hidden:
            continue
        error = _check_field(field, values.get(field.field_name))
        if error:
            errors.append(error)
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_row(
    fields: Iterable[FieldDefinition], row: Mapping[str, str], column_mapping: Mapping[str, str | None]
) -> list[str]:
    """Validate one CSV row given the header → field name mapping.

    A required field that no header maps to is reported as not mapped.
    """
    header_for: dict[str, str] = {}
    for header, field_name in column_mapping.items():
        if field_name and field_name not in header_for:
            header_for[field_name] = header

    errors: list[str] = []
    for field in fields:
        if field.is_hidden:
            continue
        header = header_for.get(field.field_name)
        if header is None:
            error = _check_field(field, None, unmapped_message=True)
        else:
            error = _check_field(field, row.get(header))
        if error:
            errors.append(error)
    return errors
