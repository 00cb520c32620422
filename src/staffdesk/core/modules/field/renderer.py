"""Turns field definitions into input descriptors for a form.

The renderer is stateless: it describes an input and hands back a change
handle. Writing values is left to whoever supplied ``on_change``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field

from staffdesk.core.modules.field.models import FieldDefinition, FieldType

type OnChange = Callable[[str, str], None]

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class InputType(StrEnum):
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    NUMBER = "number"
    DATE = "date"
    URL = "url"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    FILE = "file"


_INPUT_TYPES: dict[FieldType, InputType] = {
    FieldType.TEXT: InputType.TEXT,
    FieldType.EMAIL: InputType.EMAIL,
    FieldType.PHONE: InputType.TEL,
    FieldType.NUMBER: InputType.NUMBER,
    FieldType.DATE: InputType.DATE,
    FieldType.URL: InputType.URL,
    FieldType.TEXTAREA: InputType.TEXTAREA,
    FieldType.SELECT: InputType.SELECT,
    FieldType.RADIO: InputType.RADIO,
    FieldType.CHECKBOX: InputType.CHECKBOX,
    FieldType.FILE: InputType.FILE,
}


class InputDescriptor(BaseModel):
    """Everything a client needs to draw one input."""

    field_name: str
    label: str
    input_type: InputType
    value: str = ""
    choices: list[str] = Field(default_factory=list)
    include_empty_choice: bool = False
    checked: bool | None = None
    placeholder: str | None = None
    required_marker: bool = False
    multiline: bool = False


@dataclass(frozen=True)
class RenderedInput:
    descriptor: InputDescriptor
    on_change: OnChange

    @property
    def field_name(self) -> str:
        return self.descriptor.field_name

    def change(self, new_value: str | bool) -> None:
        """Report a user edit. File inputs never report."""
        input_type = self.descriptor.input_type
        if input_type == InputType.FILE:
            return
        if input_type == InputType.CHECKBOX:
            normalized = normalize_checkbox(new_value)
        else:
            normalized = str(new_value)
        self.on_change(self.descriptor.field_name, normalized)


def normalize_checkbox(value: str | bool | None) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "true" if (value or "").strip().lower() in TRUE_VALUES else "false"


def render(field: FieldDefinition, value: str | None, on_change: OnChange) -> RenderedInput | None:
    """Describe the input for one field, or None when the field is hidden."""
    if field.is_hidden:
        return None

    input_type = _INPUT_TYPES[field.field_type]
    descriptor = InputDescriptor(
        field_name=field.field_name,
        label=field.field_label,
        input_type=input_type,
        value=value or "",
        placeholder=field.placeholder,
        required_marker=field.is_required,
    )

    match field.field_type:
        case FieldType.SELECT:
            descriptor.choices = list(field.options)
            descriptor.include_empty_choice = True
        case FieldType.RADIO:
            descriptor.choices = list(field.options)
        case FieldType.TEXTAREA:
            descriptor.multiline = True
        case FieldType.CHECKBOX:
            descriptor.value = normalize_checkbox(value)
            descriptor.checked = descriptor.value == "true"
        case FieldType.FILE:
            descriptor.value = ""

    return RenderedInput(descriptor=descriptor, on_change=on_change)


def render_form(
    fields: list[FieldDefinition], values: dict[str, str], on_change: OnChange
) -> list[RenderedInput]:
    """Render every visible field in the given order."""
    rendered = (render(field, values.get(field.field_name), on_change) for field in fields)
    return [item for item in rendered if item is not None]
