from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as SchemaError

from ..core.exceptions import ValidationError

F = TypeVar("F", bound="FormSchema")

VALIDATION_FAILED = "Validation failed. Please check your input."


class FormSchema(BaseModel):
    """Base for every submitted form.

    Field aliases carry the form/document names (camelCase) so field errors
    come back keyed the way the form posted them. Blank strings are treated as
    "not submitted".
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _message(err: dict) -> str:
    kind = err.get("type", "")
    if kind == "missing" or (err.get("input") is None and kind.endswith("_type")):
        return "This field is required."
    msg = str(err.get("msg", "Invalid value."))
    if kind == "value_error" and msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


def field_errors_from(exc: SchemaError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        key = str(loc[0]) if loc else "form"
        errors.setdefault(key, []).append(_message(err))
    return errors


def validate_form(schema: type[F], data: Mapping[str, Any]) -> F:
    """Validate raw form data against ``schema``.

    Raises ``ValidationError`` carrying per-field messages.
    """

    try:
        return schema.model_validate(dict(data))
    except SchemaError as e:
        raise ValidationError(VALIDATION_FAILED, field_errors_from(e))
