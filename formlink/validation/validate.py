"""Validating form records with a resolver.

``validate_form_data`` runs an already-parsed record through a resolver;
``get_validated_form_data`` reads the record out of a request first.
Nothing here catches exceptions: parse errors and resolver failures reach
the caller unchanged.
"""

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from formlink.config import DEFAULT_FORM_DATA_KEY
from formlink.errortree import ErrorTree, build_error_tree
from formlink.payload import FormRequest, parse_form_data
from formlink.resolvers.base import Resolver, ResolverOptions, ResolverResult
from formlink.validation.result import ValidationResult

logger = logging.getLogger(__name__)


def _unpack(outcome: Any) -> tuple[Any, ErrorTree]:
    """Split a resolver's output into values and an error tree."""
    if isinstance(outcome, ResolverResult):
        return outcome.values, build_error_tree(outcome.errors)
    if isinstance(outcome, Mapping):
        return outcome.get("values"), build_error_tree(outcome.get("errors"))
    raise TypeError(
        f"Resolver must return a ResolverResult or a mapping with 'values' and "
        f"'errors', got {type(outcome).__name__}"
    )


async def validate_form_data(
    data: Any,
    resolver: Resolver,
    *,
    options: ResolverOptions | None = None,
) -> ValidationResult:
    """Validate a parsed record with ``resolver``.

    The resolver is called as ``resolver(data, {}, options)`` with native
    validation disabled and no field metadata. Sync and async resolvers
    are both accepted.

    Args:
        data: The record to validate.
        resolver: Callable conforming to the Resolver protocol.
        options: Optional resolver options (e.g. ``criteria_mode="all"``).
            ``should_use_native_validation`` and ``fields`` are always reset.

    Returns:
        ValidationResult with ``errors`` set if the resolver reported any,
        otherwise with ``data`` set to the resolver's values.
    """
    resolver_options = (options or ResolverOptions()).model_copy(
        update={"should_use_native_validation": False, "fields": {}}
    )

    outcome = resolver(data, {}, resolver_options)
    if inspect.isawaitable(outcome):
        outcome = await outcome

    values, errors = _unpack(outcome)

    if errors:
        logger.debug("Form data failed validation: %d field(s) with errors", len(errors))
        return ValidationResult(errors=errors)

    logger.debug("Form data passed validation")
    return ValidationResult(data=values)


async def get_validated_form_data(
    request: FormRequest,
    resolver: Resolver,
    key: str = DEFAULT_FORM_DATA_KEY,
    *,
    options: ResolverOptions | None = None,
) -> ValidationResult:
    """Parse the record under ``key`` from ``request`` and validate it.

    Raises:
        MissingFormDataError, FormDataTypeError, FormDataParseError: From
            parsing, see ``parse_form_data``.
        Exception: Whatever the resolver raises.
    """
    data = await parse_form_data(request, key)
    return await validate_form_data(data, resolver, options=options)
