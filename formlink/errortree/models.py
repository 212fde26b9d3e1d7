"""Field error tree models.

A field error tree mirrors the shape of a validated record. Every node is
one of three immutable variants, tagged by ``kind``:

- ``FieldError``: a leaf carrying a message and an error type, plus any
  extra metadata the producer attached (``types``, ``ref``, ...).
- ``ErrorTree``: a mapping from field name to child node.
- ``ErrorList``: errors for an array-shaped field, one slot per element.
  Treated as a leaf when merging.

The variant is decided once, when plain dicts are turned into nodes by
``build_error_tree``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """A single field's validation error."""

    model_config = ConfigDict(frozen=True, extra="allow")

    kind: Literal["leaf"] = "leaf"
    message: str | None = None
    type: str | None = None

    @property
    def meta(self) -> dict[str, Any]:
        """Extra metadata attached to the error (everything but message/type)."""
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, dropping unset fields."""
        return self.model_dump(exclude={"kind"}, exclude_none=True)


class ErrorList(BaseModel):
    """Errors for an array-shaped field. ``None`` marks an element without errors."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    entries: tuple[ErrorNode | None, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> list[Any]:
        """Convert to a plain list."""
        return [None if entry is None else entry.to_dict() for entry in self.entries]


class ErrorTree(BaseModel):
    """A mapping from field name to error node."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tree"] = "tree"
    children: dict[str, ErrorNode] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)

    def __contains__(self, key: object) -> bool:
        return key in self.children

    def __getitem__(self, key: str) -> ErrorNode:
        return self.children[key]

    def get(self, key: str, default: ErrorNode | None = None) -> ErrorNode | None:
        return self.children.get(key, default)

    def keys(self) -> list[str]:
        return list(self.children.keys())

    def items(self) -> list[tuple[str, ErrorNode]]:
        return list(self.children.items())

    def set_error(
        self,
        path: str | Sequence[str],
        error: FieldError | Mapping[str, Any] | str,
    ) -> ErrorTree:
        """Return a copy of this tree with ``error`` placed at ``path``.

        Subtrees along a dotted path (``"address.city"``) are created as
        needed. A non-tree node sitting on the path is replaced.

        Args:
            path: Dotted string or sequence of field names.
            error: The leaf to place. Strings become ``FieldError(message=...)``.

        Returns:
            A new ErrorTree; this tree is left untouched.
        """
        parts = path.split(".") if isinstance(path, str) else list(path)
        if not parts or any(not part for part in parts):
            raise ValueError(f"Invalid error path: {path!r}")

        head, *rest = parts
        if rest:
            child = self.children.get(head)
            if not isinstance(child, ErrorTree):
                child = ErrorTree()
            node: ErrorNode = child.set_error(rest, error)
        else:
            node = _build_node(error)

        return self.model_copy(update={"children": {**self.children, head: node}})

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain nested dicts and lists."""
        return {key: node.to_dict() for key, node in self.children.items()}


ErrorNode = Annotated[
    Union[FieldError, ErrorTree, ErrorList],
    Field(discriminator="kind"),
]

ErrorList.model_rebuild()
ErrorTree.model_rebuild()


def _is_leaf(value: Mapping[str, Any]) -> bool:
    """Whether a plain mapping describes a leaf error rather than a subtree."""
    if "message" in value and (value["message"] is None or isinstance(value["message"], str)):
        return True
    return isinstance(value.get("type"), str)


def _build_node(value: Any) -> ErrorNode:
    if isinstance(value, (FieldError, ErrorTree, ErrorList)):
        return value

    if isinstance(value, str):
        return FieldError(message=value)

    if isinstance(value, Mapping):
        if _is_leaf(value):
            return FieldError.model_validate(
                {k: v for k, v in value.items() if k != "kind"}
            )
        return ErrorTree(
            children={str(k): _build_node(v) for k, v in value.items()}
        )

    if isinstance(value, (list, tuple)):
        return ErrorList(
            entries=tuple(None if entry is None else _build_node(entry) for entry in value)
        )

    raise TypeError(f"Cannot build an error node from {type(value).__name__}: {value!r}")


def build_error_tree(errors: ErrorTree | Mapping[str, Any] | None) -> ErrorTree:
    """Build an ErrorTree from a plain nested error mapping.

    The top level is always a tree keyed by field name. Below it:

    - lists and tuples become ``ErrorList`` nodes,
    - mappings with a string (or null) ``message``, or a string ``type``,
      become ``FieldError`` leaves,
    - any other mapping becomes a nested ``ErrorTree``,
    - bare strings become leaves with that message.

    Args:
        errors: Plain error mapping, an existing tree, or None.

    Returns:
        The ErrorTree (``errors`` itself if it already is one).

    Raises:
        TypeError: If a node cannot be classified.
    """
    if errors is None:
        return ErrorTree()
    if isinstance(errors, ErrorTree):
        return errors
    if not isinstance(errors, Mapping):
        raise TypeError(f"Error tree must be a mapping, got {type(errors).__name__}")

    return ErrorTree(children={str(k): _build_node(v) for k, v in errors.items()})
