# api/validation.py
from dataclasses import dataclass, field, asdict
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of validating a request: the typed value or field-level errors."""
    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the value, raising ValidationError if validation failed."""
        if not self.ok:
            raise ValidationError([asdict(error) for error in self.errors])
        return self.value


def field_errors(exc) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        errors.append(FieldError(field=loc or "request", message=error.get("msg", "Invalid value")))
    return errors


def validate(model: Type[T], data: Optional[Mapping[str, Any]]) -> ValidationResult[T]:
    """Validate raw query or body data against a request model."""
    try:
        return ValidationResult(value=model.model_validate(dict(data or {})))
    except PydanticValidationError as e:
        return ValidationResult(errors=field_errors(e))
