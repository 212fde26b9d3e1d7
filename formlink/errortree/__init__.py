"""Field error trees and merging.

Provides the tagged error-tree variants and ``merge_errors`` for combining
client-side and server-side validation errors.
"""

from formlink.errortree.merge import merge_error_dicts, merge_errors
from formlink.errortree.models import (
    ErrorList,
    ErrorNode,
    ErrorTree,
    FieldError,
    build_error_tree,
)

__all__ = [
    "ErrorList",
    "ErrorNode",
    "ErrorTree",
    "FieldError",
    "build_error_tree",
    "merge_error_dicts",
    "merge_errors",
]
