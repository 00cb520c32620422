"""Tests for input descriptors and the change path."""

from staffdesk.core.modules.field.models import FieldType
from staffdesk.core.modules.field.renderer import InputType, render, render_form


class Recorder:
    """Collects on_change calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, field_name, value):
        self.calls.append((field_name, value))


class TestRender:
    def test_hidden_field_renders_nothing(self, field_factory):
        field = field_factory("secret", is_hidden=True)
        assert render(field, "x", Recorder()) is None

    def test_select_has_empty_choice(self, field_factory):
        field = field_factory("Field_3", "Source", FieldType.SELECT, options=["Referral", "Job Board"])
        descriptor = render(field, "Referral", Recorder()).descriptor
        assert descriptor.input_type == InputType.SELECT
        assert descriptor.choices == ["Referral", "Job Board"]
        assert descriptor.include_empty_choice is True

    def test_radio_has_no_empty_choice(self, field_factory):
        field = field_factory("Field_5", "Shift", FieldType.RADIO, options=["Day", "Night"])
        descriptor = render(field, "", Recorder()).descriptor
        assert descriptor.choices == ["Day", "Night"]
        assert descriptor.include_empty_choice is False

    def test_phone_is_tel(self, field_factory):
        descriptor = render(field_factory("phone", field_type=FieldType.PHONE), "", Recorder()).descriptor
        assert descriptor.input_type == InputType.TEL

    def test_textarea_is_multiline(self, field_factory):
        descriptor = render(field_factory("notes", field_type=FieldType.TEXTAREA), "", Recorder()).descriptor
        assert descriptor.multiline is True

    def test_required_only_sets_marker(self, field_factory):
        descriptor = render(field_factory("firstName", is_required=True), "", Recorder()).descriptor
        assert descriptor.required_marker is True

    def test_checkbox_reports_checked_state(self, field_factory):
        field = field_factory("Field_2", field_type=FieldType.CHECKBOX)
        assert render(field, "true", Recorder()).descriptor.checked is True
        assert render(field, "", Recorder()).descriptor.checked is False

    def test_render_form_skips_hidden(self, custom_form_fields):
        inputs = render_form(custom_form_fields, {}, Recorder())
        assert "Field_4" not in [item.field_name for item in inputs]
        assert len(inputs) == len(custom_form_fields) - 1


class TestChange:
    """RenderedInput.change is the only way values leave the renderer."""

    def test_text_change_reports_value(self, field_factory):
        recorder = Recorder()
        render(field_factory("firstName"), "", recorder).change("Ada")
        assert recorder.calls == [("firstName", "Ada")]

    def test_checkbox_change_reports_true_false(self, field_factory):
        recorder = Recorder()
        rendered = render(field_factory("Field_2", field_type=FieldType.CHECKBOX), "", recorder)
        rendered.change(True)
        rendered.change("off")
        rendered.change("yes")
        assert recorder.calls == [("Field_2", "true"), ("Field_2", "false"), ("Field_2", "true")]

    def test_file_change_is_never_reported(self, field_factory):
        recorder = Recorder()
        render(field_factory("resumeUpload", field_type=FieldType.FILE), "", recorder).change("resume.pdf")
        assert recorder.calls == []

    def test_render_does_not_call_on_change(self, custom_form_fields):
        recorder = Recorder()
        render_form(custom_form_fields, {"firstName": "Ada"}, recorder)
        assert recorder.calls == []
