"""Merging frontend and backend error trees.

Errors produced in the browser (frontend) and errors produced by the server
(backend) are combined into one tree for display, with backend leaf messages
taking precedence. Neither input is modified; a new tree is returned.
"""

import logging
from collections.abc import Mapping
from typing import Any

from formlink.errortree.models import (
    ErrorNode,
    ErrorTree,
    FieldError,
    _is_leaf,
    build_error_tree,
)

logger = logging.getLogger(__name__)


def _merge_node(left: ErrorNode | None, right: ErrorNode) -> ErrorNode:
    """Merge one backend node onto the frontend node at the same key."""
    if isinstance(right, ErrorTree):
        # Backend shape wins: a frontend leaf or list is dropped for the subtree.
        base = left if isinstance(left, ErrorTree) else ErrorTree()
        return _merge_trees(base, right)

    if isinstance(right, FieldError):
        if isinstance(left, FieldError):
            if not right.message:
                return left
            return left.model_copy(update={"message": right.message})
        return right

    # ErrorList is an opaque leaf; element-wise merging is not attempted.
    return right


def _merge_trees(frontend: ErrorTree, backend: ErrorTree) -> ErrorTree:
    if not backend:
        return frontend

    merged = dict(frontend.children)
    for key, right in backend.children.items():
        merged[key] = _merge_node(merged.get(key), right)

    return frontend.model_copy(update={"children": merged})


def merge_errors(
    frontend: ErrorTree | None,
    backend: ErrorTree | None,
) -> ErrorTree:
    """Merge a backend error tree into a frontend error tree.

    For every key in ``backend``:

    - a subtree is merged recursively into the frontend subtree at that key
      (created if missing; replacing a frontend leaf or list if the shapes
      disagree),
    - a leaf overwrites only the ``message`` of an existing frontend leaf,
      keeping the frontend's type and metadata; a missing or differently
      shaped frontend node is replaced by the backend leaf,
    - a list replaces whatever the frontend had.

    Keys only present in ``frontend`` are kept as they are.

    Args:
        frontend: Errors produced client-side. None counts as empty.
        backend: Errors produced server-side.

    Returns:
        The merged tree. ``frontend`` itself when ``backend`` is None or empty.
    """
    if frontend is None:
        frontend = ErrorTree()
    if not backend:
        return frontend

    merged = _merge_trees(frontend, backend)
    logger.debug(
        "Merged %d backend error field(s) into %d frontend field(s): %d total",
        len(backend),
        len(frontend),
        len(merged),
    )
    return merged


def _merge_plain(frontend: Mapping[str, Any], backend: ErrorTree) -> dict[str, Any]:
    """Merge a backend tree into a plain mapping, copying untouched keys as-is."""
    merged = dict(frontend)
    for key, right in backend.children.items():
        left = merged.get(key)
        if isinstance(right, ErrorTree) and isinstance(left, Mapping) and not _is_leaf(left):
            merged[key] = _merge_plain(left, right)
        elif isinstance(right, FieldError) and isinstance(left, str):
            merged[key] = {"message": right.message} if right.message else left
        elif isinstance(right, FieldError) and isinstance(left, Mapping) and _is_leaf(left):
            merged[key] = {**left, "message": right.message} if right.message else left
        else:
            merged[key] = right.to_dict()
    return merged


def merge_error_dicts(
    frontend: Mapping[str, Any] | None,
    backend: Mapping[str, Any] | None,
) -> Mapping[str, Any] | None:
    """Merge two plain error mappings (as produced by resolvers or clients).

    Plain-dict counterpart of ``merge_errors``. The backend is classified
    with ``build_error_tree``; the frontend is walked only along the keys
    the backend touches. Everything else in ``frontend`` is copied over
    unchanged, so bare-string leaves, ``None`` metadata and unknown keys
    keep their original form.

    Returns:
        ``frontend`` unchanged when ``backend`` is None or empty, otherwise
        a new dict.

    Raises:
        TypeError: If either side is not a mapping, or a backend node cannot
            be classified.
    """
    if not backend:
        return frontend
    if frontend is None:
        frontend = {}
    if not isinstance(frontend, Mapping):
        raise TypeError(f"Error tree must be a mapping, got {type(frontend).__name__}")

    backend_tree = build_error_tree(backend)
    merged = _merge_plain(frontend, backend_tree)
    logger.debug(
        "Merged %d backend error field(s) into %d frontend field(s): %d total",
        len(backend_tree),
        len(frontend),
        len(merged),
    )
    return merged
