from __future__ import annotations

from typing import Optional

import pytest
from pydantic import Field, field_validator

from src.hr_assistant.hr_assistant.common.results import FormResult, handle_form
from src.hr_assistant.hr_assistant.common.validators import FormSchema, validate_form
from src.hr_assistant.hr_assistant.core.exceptions import NotFoundError, ValidationError


class SampleForm(FormSchema):
    employee_doc_id: str = Field(alias="employeeDocId")
    hours: Optional[float] = None

    @field_validator("hours")
    @classmethod
    def _positive(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Hours must be positive.")
        return v


def test_missing_field_is_keyed_by_form_name():
    with pytest.raises(ValidationError) as exc:
        validate_form(SampleForm, {})

    assert exc.value.field_errors == {"employeeDocId": ["This field is required."]}


def test_blank_string_counts_as_missing():
    with pytest.raises(ValidationError) as exc:
        validate_form(SampleForm, {"employeeDocId": "   "})

    assert exc.value.field_errors == {"employeeDocId": ["This field is required."]}


def test_value_error_prefix_is_removed():
    with pytest.raises(ValidationError) as exc:
        validate_form(SampleForm, {"employeeDocId": "e1", "hours": "-2"})

    assert exc.value.field_errors == {"hours": ["Hours must be positive."]}


def test_values_are_stripped():
    form = validate_form(SampleForm, {"employeeDocId": "  e1 ", "extra": "ignored"})

    assert form.employee_doc_id == "e1"
    assert form.hours is None


def test_handle_form_success_message_from_value():
    result = handle_form(lambda: "Sara", success=lambda name: f"Saved {name}.", failure="Failed.")

    assert result == FormResult(success=True, message="Saved Sara.")


def test_handle_form_keeps_field_errors():
    def action():
        raise ValidationError("Validation failed.", {"name": ["Too short."]})

    result = handle_form(action, success="ok", failure="Failed.")

    assert not result.success
    assert result.errors == {"name": ["Too short."]}


def test_handle_form_domain_error_goes_to_form():
    def action():
        raise NotFoundError("Employee not found.")

    result = handle_form(action, success="ok", failure="Failed.")

    assert result.to_dict() == {
        "success": False,
        "message": "Employee not found.",
        "errors": {"form": ["Employee not found."]},
        "data": {},
    }


def test_handle_form_unexpected_error_is_generic(caplog):
    def action():
        raise RuntimeError("connection reset")

    result = handle_form(action, success="ok", failure="Failed to save. An unexpected error occurred.")

    assert result.message == "Failed to save. An unexpected error occurred."
    assert "connection reset" not in result.message
    assert "Form action failed" in caplog.text
