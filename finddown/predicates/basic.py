"""Conversion of search tests into a single predicate."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Callable, Union

from finddown.models import NO_DECISION, Predicate, VFile, VisitOutcome

HIDDEN_PREFIX = "."
DEPENDENCY_DIRECTORIES = {"node_modules"}

Test = Union[str, Callable[..., Any], list, tuple]


def normalize_result(result: Any) -> VisitOutcome:
    """Map any supported predicate return value onto a VisitOutcome.

    ``None`` and ``False`` mean no decision, ``True`` means include, integers
    are ``INCLUDE | SKIP | BREAK`` bitmasks, and mappings may carry
    ``include``, ``skip`` and ``break`` keys.

    Raises:
        TypeError: If the value is of an unsupported type.
    """
    if isinstance(result, VisitOutcome):
        return result
    if result is None or result is False:
        return NO_DECISION
    if result is True:
        return VisitOutcome(include=True)
    if isinstance(result, int):
        return VisitOutcome.from_flags(result)
    if isinstance(result, Mapping):
        return VisitOutcome(
            include=bool(result.get("include")),
            skip=bool(result.get("skip")),
            break_=bool(result.get("break", result.get("break_"))),
        )
    raise TypeError(f"Unsupported predicate result: {type(result).__name__}")


def convert(test: Test) -> Predicate:
    """Convert a callable, string, or list of either into one predicate.

    Raises:
        TypeError: If the test (or one of its elements) is neither a string,
            a callable, nor a list.
    """
    if isinstance(test, str):
        return convert_string(test)
    if callable(test):
        return convert_callable(test)
    if isinstance(test, (list, tuple)):
        return convert_tests(test)
    raise TypeError(f"Unsupported test: {type(test).__name__}")


def convert_callable(test: Callable[..., Any]) -> Predicate:
    """Wrap a user predicate so its result is always a VisitOutcome."""

    def assert_callable(file: VFile, stats: os.stat_result) -> VisitOutcome:
        return normalize_result(test(file, stats))

    return assert_callable


def convert_string(test: str) -> Predicate:
    """Match ``test`` against the basename or extension of each file.

    Hidden entries and dependency directories that do not match are skipped.
    """

    def assert_string(file: VFile, stats: os.stat_result | None = None) -> VisitOutcome:
        if test == file.basename or test == file.extname:
            return VisitOutcome(include=True)

        basename = file.basename
        if basename and (
            basename.startswith(HIDDEN_PREFIX) or basename in DEPENDENCY_DIRECTORIES
        ):
            return VisitOutcome(skip=True)

        return NO_DECISION

    return assert_string


def convert_tests(tests: list | tuple) -> Predicate:
    """Combine several tests; the first one with a decision wins."""
    predicates = [convert(test) for test in tests]

    def assert_any(file: VFile, stats: os.stat_result) -> VisitOutcome:
        for predicate in predicates:
            outcome = predicate(file, stats)
            if outcome:
                return outcome
        return NO_DECISION

    return assert_any
