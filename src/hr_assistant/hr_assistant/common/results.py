from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar, Union

from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FormResult:
    """Typed result returned to a submitting form."""

    success: bool
    message: Optional[str] = None
    errors: dict[str, list[str]] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: Optional[str] = None, **data: Any) -> "FormResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, message: str, errors: Optional[dict[str, list[str]]] = None) -> "FormResult":
        return cls(success=False, message=message, errors=errors or {"form": [message]})

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message, "errors": self.errors, "data": self.data}


def handle_form(
    action: Callable[[], T],
    *,
    success: Union[str, Callable[[T], str]],
    failure: str,
    data: Optional[Callable[[T], dict[str, Any]]] = None,
) -> FormResult:
    """Run one form action and map its outcome to a ``FormResult``.

    Validation errors are returned field by field, other domain errors as a
    form-level message. Anything else is a backend failure: logged here and
    surfaced as the generic ``failure`` message. Nothing is retried.
    """

    try:
        value = action()
    except ValidationError as e:
        return FormResult.failure(str(e), e.field_errors or None)
    except DomainError as e:
        return FormResult.failure(str(e))
    except Exception:
        logger.exception("Form action failed: %s", failure)
        return FormResult.failure(failure)

    message = success(value) if callable(success) else success
    return FormResult(success=True, message=message, data=data(value) if data else {})
