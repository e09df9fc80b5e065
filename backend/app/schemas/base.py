"""Shared schema configuration."""

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from app.core.exceptions import ValidationFailedError


class APIModel(BaseModel):
    """
    Base for all request/response schemas.

    Fields are snake_case in Python and camelCase on the wire; both
    spellings are accepted on input. ORM objects can be validated directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


ModelT = TypeVar("ModelT", bound=APIModel)


def form_errors(exc: ValidationError) -> list:
    """Flatten pydantic errors into ``[{"field", "message"}]``."""
    return [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]


def validate_form(model: Type[ModelT], **values: Any) -> ModelT:
    """
    Build a schema from multipart form fields.

    Raises:
        ValidationFailedError: with per-field details
    """
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise ValidationFailedError(details=form_errors(exc))
