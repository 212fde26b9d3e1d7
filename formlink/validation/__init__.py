"""Validation of form records through resolvers."""

from formlink.validation.result import ValidationResult
from formlink.validation.validate import get_validated_form_data, validate_form_data

__all__ = [
    "ValidationResult",
    "get_validated_form_data",
    "validate_form_data",
]
