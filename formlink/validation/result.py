"""ValidationResult model: the success/failure union returned by validation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from formlink.errortree import ErrorTree, build_error_tree


class ValidationResult(BaseModel):
    """Outcome of validating a record with a resolver.

    Exactly one of `errors` or `data` must be set (XOR constraint). Passing
    `data=None` explicitly is a success whose resolved value is None.

    Attributes:
        errors: Non-empty field error tree when validation failed.
        data: The resolver's coerced values when validation succeeded.
    """

    errors: ErrorTree | None = None
    data: Any = None

    model_config = {"extra": "forbid"}

    @field_validator("errors", mode="before")
    @classmethod
    def build_errors(cls, value: Any) -> Any:
        """Accept plain nested error mappings as well as ErrorTree."""
        if isinstance(value, Mapping) and not isinstance(value, ErrorTree):
            return build_error_tree(value)
        return value

    @model_validator(mode="after")
    def validate_errors_xor_data(self) -> ValidationResult:
        """Ensure exactly one of errors or data is set."""
        has_errors = self.errors is not None

        if has_errors and not self.errors:
            raise ValueError("'errors' must not be empty; use errors=None on success")
        if has_errors and self.data is not None:
            raise ValueError("Cannot set both 'errors' and 'data'; use exactly one")
        # data=None passed explicitly is a success with a None value.
        if not has_errors and "data" not in self.model_fields_set:
            raise ValueError("Must set exactly one of 'errors' or 'data'")

        return self

    @property
    def success(self) -> bool:
        """Whether validation passed."""
        return self.errors is None

    def to_dict(self) -> dict:
        """Convert to dictionary, excluding None values."""
        if self.errors is not None:
            return {"errors": self.errors.to_dict()}
        data = self.data
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        return {"data": data}
