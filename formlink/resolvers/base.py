"""Resolver protocol and shared models.

A resolver validates a raw record against some schema and reports either
the coerced values or a plain nested error mapping. ``validate_form_data``
accepts any callable of this shape, sync or async.
"""

from collections.abc import Awaitable, Mapping, Sequence
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field

ROOT_ERROR_KEY = "root"

CriteriaMode = Literal["firstError", "all"]


class ResolverOptions(BaseModel):
    """Options passed to a resolver on every call."""

    should_use_native_validation: bool = False
    fields: dict[str, Any] = Field(default_factory=dict)
    criteria_mode: CriteriaMode = "firstError"


class ResolverResult(BaseModel):
    """What a resolver returns: coerced values, or errors keyed by field."""

    values: Any = None
    errors: dict[str, Any] = Field(default_factory=dict)


@runtime_checkable
class Resolver(Protocol):
    """Protocol for resolvers.

    Implementations may return the result directly or an awaitable of it.
    Exceptions raised by a resolver are propagated to the caller as-is.
    """

    def __call__(
        self,
        data: Any,
        context: Mapping[str, Any],
        options: ResolverOptions,
    ) -> ResolverResult | Mapping[str, Any] | Awaitable[ResolverResult | Mapping[str, Any]]:
        """Validate ``data`` and return values or errors.

        Args:
            data: The raw record to validate.
            context: Caller-provided context (empty when called by formlink).
            options: Resolver options; native validation is always off.
        """
        ...


class _ErrorLeaf(dict):
    """A leaf recorded by place_error, told apart from subtrees by type."""


def _slot_get(container: dict | list, part: str | int) -> Any:
    if isinstance(container, list):
        return container[part] if isinstance(part, int) and part < len(container) else None
    return container.get(str(part))


def _slot_set(container: dict | list, part: str | int, value: Any) -> None:
    if isinstance(container, list):
        container.extend([None] * (part + 1 - len(container)))
        container[part] = value
    else:
        container[str(part)] = value


def place_error(
    errors: dict[str, Any],
    path: Sequence[str | int],
    error_type: str,
    message: str,
    criteria_mode: CriteriaMode = "firstError",
) -> None:
    """Record one error in a plain nested error mapping, in place.

    Integer path parts create lists, string parts create dicts. An empty
    path records the error under ``"root"``.

    With ``criteria_mode="firstError"`` the first error recorded for a field
    is kept. With ``"all"`` later errors are collected under the leaf's
    ``types`` mapping, keyed by error type.
    """
    path = list(path) or [ROOT_ERROR_KEY]

    container: dict | list = errors
    for part, next_part in zip(path, path[1:]):
        if isinstance(container, list) and not isinstance(part, int):
            return
        child = _slot_get(container, part)
        if child is None:
            child = [] if isinstance(next_part, int) else {}
            _slot_set(container, part, child)
        elif isinstance(child, _ErrorLeaf) or not isinstance(child, (dict, list)):
            # A leaf already sits on this path; the first error wins.
            return
        container = child

    last = path[-1]
    if isinstance(container, list) and not isinstance(last, int):
        return

    existing = _slot_get(container, last)
    if existing is None:
        leaf = _ErrorLeaf(type=error_type, message=message)
        if criteria_mode == "all":
            leaf["types"] = {error_type: message}
        _slot_set(container, last, leaf)
    elif criteria_mode == "all" and isinstance(existing, _ErrorLeaf):
        existing.setdefault("types", {}).setdefault(error_type, message)
