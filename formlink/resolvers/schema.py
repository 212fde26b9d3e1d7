"""JSON Schema resolver backed by jsonschema."""

from collections.abc import Mapping
from typing import Any

import jsonschema
from jsonschema.exceptions import ValidationError

from formlink.resolvers.base import ResolverOptions, ResolverResult, place_error


def _error_path(error: ValidationError) -> list[str | int]:
    """Path of the field an error belongs to.

    ``required`` errors are reported by jsonschema against the parent object;
    move them onto the missing property itself.
    """
    path: list[str | int] = list(error.absolute_path)
    if error.validator == "required" and isinstance(error.instance, Mapping):
        for prop in error.validator_value:
            if prop not in error.instance and error.message.startswith(repr(prop)):
                return path + [prop]
    return path


class JsonSchemaResolver:
    """Resolver that validates records against a JSON Schema.

    The schema's dialect is picked from its ``$schema`` keyword (latest
    draft by default) and the schema itself is checked on construction.
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        *,
        format_checker: bool = True,
    ) -> None:
        """Initialize the resolver.

        Args:
            schema: The JSON Schema to validate against.
            format_checker: Whether to enforce ``format`` keywords.

        Raises:
            jsonschema.SchemaError: If the schema itself is invalid.
        """
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)

        self.schema = schema
        self._validator = validator_cls(
            schema,
            format_checker=validator_cls.FORMAT_CHECKER if format_checker else None,
        )

    def __call__(
        self,
        data: Any,
        context: Mapping[str, Any],
        options: ResolverOptions,
    ) -> ResolverResult:
        errors: dict[str, Any] = {}
        for error in self._validator.iter_errors(data):
            place_error(
                errors,
                _error_path(error),
                str(error.validator),
                error.message,
                options.criteria_mode,
            )

        if errors:
            return ResolverResult(values={}, errors=errors)
        return ResolverResult(values=data, errors={})
