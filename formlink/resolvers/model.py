"""Resolver backed by a pydantic model."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from formlink.resolvers.base import ResolverOptions, ResolverResult, place_error


class ModelResolver:
    """Resolver that validates records by constructing a pydantic model.

    On success the resolved values are the model instance. Each pydantic
    error becomes a leaf at its ``loc``, with the error's ``type`` and
    ``msg``. The resolver context is forwarded as the validation context.
    """

    def __init__(self, model: type[BaseModel]) -> None:
        self.model = model

    def __call__(
        self,
        data: Any,
        context: Mapping[str, Any],
        options: ResolverOptions,
    ) -> ResolverResult:
        try:
            instance = self.model.model_validate(data, context=dict(context) or None)
        except ValidationError as e:
            errors: dict[str, Any] = {}
            for error in e.errors(include_url=False):
                place_error(
                    errors,
                    error["loc"],
                    error["type"],
                    error["msg"],
                    options.criteria_mode,
                )
            return ResolverResult(values={}, errors=errors)

        return ResolverResult(values=instance, errors={})
