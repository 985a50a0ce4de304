"""Predicates deciding what the search includes, skips, or stops at."""

from finddown.predicates.basic import (
    DEPENDENCY_DIRECTORIES,
    HIDDEN_PREFIX,
    convert,
    convert_string,
    normalize_result,
)

__all__ = [
    "DEPENDENCY_DIRECTORIES",
    "HIDDEN_PREFIX",
    "convert",
    "convert_string",
    "normalize_result",
]
