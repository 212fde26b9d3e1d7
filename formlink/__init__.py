"""formlink: bridge HTTP form submissions to schema validation."""

__version__ = "0.1.0"

from formlink.errors import (
    FormDataError,
    FormDataParseError,
    FormDataSerializationError,
    FormDataTypeError,
    MissingFormDataError,
)
from formlink.errortree import (
    ErrorList,
    ErrorTree,
    FieldError,
    build_error_tree,
    merge_error_dicts,
    merge_errors,
)
from formlink.payload import create_form_data, encode_form_data, parse_form_data
from formlink.resolvers import (
    JsonSchemaResolver,
    ModelResolver,
    Resolver,
    ResolverOptions,
    ResolverResult,
)
from formlink.validation import (
    ValidationResult,
    get_validated_form_data,
    validate_form_data,
)

__all__ = [
    "__version__",
    "ErrorList",
    "ErrorTree",
    "FieldError",
    "FormDataError",
    "FormDataParseError",
    "FormDataSerializationError",
    "FormDataTypeError",
    "JsonSchemaResolver",
    "MissingFormDataError",
    "ModelResolver",
    "Resolver",
    "ResolverOptions",
    "ResolverResult",
    "ValidationResult",
    "build_error_tree",
    "create_form_data",
    "encode_form_data",
    "get_validated_form_data",
    "merge_error_dicts",
    "merge_errors",
    "parse_form_data",
    "validate_form_data",
]
