"""Resolvers: adapters from validation libraries to field error mappings."""

from formlink.resolvers.base import (
    Resolver,
    ResolverOptions,
    ResolverResult,
    place_error,
)
from formlink.resolvers.model import ModelResolver
from formlink.resolvers.schema import JsonSchemaResolver

__all__ = [
    "JsonSchemaResolver",
    "ModelResolver",
    "Resolver",
    "ResolverOptions",
    "ResolverResult",
    "place_error",
]
