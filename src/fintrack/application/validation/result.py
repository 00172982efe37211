"""Tagged validation result for form input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Optional, TypeVar

import pydantic

from fintrack.application.validation.forms import FormModel
from fintrack.domain.shared.exceptions import FieldErrors, ValidationError

F = TypeVar("F", bound=FormModel)


@dataclass(frozen=True)
class ValidationResult(Generic[F]):
    """Either a validated form (``ok``) or per-field error messages."""

    value: Optional[F] = None
    field_errors: FieldErrors = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.field_errors

    def first_error(self, field_name: str) -> Optional[str]:
        messages = self.field_errors.get(field_name)
        return messages[0] if messages else None

    def unwrap(self) -> F:
        """Return the validated form or raise ValidationError."""
        if not self.ok:
            raise ValidationError("Please correct the highlighted fields", self.field_errors)
        return self.value  # type: ignore[return-value]


def _field_errors(schema: type[FormModel], error: pydantic.ValidationError) -> FieldErrors:
    errors: FieldErrors = {}
    for detail in error.errors():
        loc = detail.get("loc") or ("__root__",)
        name = str(loc[0])
        message = schema.MESSAGES.get(name)
        if message is None:
            message = str(detail.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages = errors.setdefault(name, [])
        if message not in messages:
            messages.append(message)
    return errors


def validate_form(schema: type[F], data: Mapping[str, Any]) -> ValidationResult[F]:
    """Validate ``data`` against ``schema`` without raising."""
    try:
        return ValidationResult(value=schema.model_validate(dict(data)))
    except pydantic.ValidationError as e:
        return ValidationResult(field_errors=_field_errors(schema, e))
