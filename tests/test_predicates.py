"""Tests for converting search tests into predicates."""

import os

import pytest

from finddown.models import BREAK, INCLUDE, SKIP, VFile, VisitOutcome
from finddown.predicates import convert, convert_string, normalize_result

STATS = os.stat(os.curdir)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("docs/readme.md", VisitOutcome(include=True)),
        ("docs/package.json", VisitOutcome(include=True)),
        ("docs/.git", VisitOutcome(skip=True)),
        ("docs/node_modules", VisitOutcome(skip=True)),
        ("docs/src", VisitOutcome()),
        ("docs/notes.txt", VisitOutcome()),
    ],
)
def test_string_matcher_decisions(path: str, expected: VisitOutcome) -> None:
    """Verify string tests include matches and skip hidden/dependency entries."""
    predicate = convert([".md", "package.json"])

    assert predicate(VFile(path), STATS) == expected


def test_string_matcher_includes_hidden_match_before_skipping() -> None:
    """Verify a hidden entry matching the literal is included, not skipped."""
    predicate = convert_string(".eslintrc")

    assert predicate(VFile("project/.eslintrc"), STATS) == VisitOutcome(include=True)


def test_string_matcher_compares_extension_exactly() -> None:
    """Verify extension matching requires the leading dot and exact case."""
    assert not convert_string("md")(VFile("readme.md"), STATS)
    assert not convert_string(".MD")(VFile("readme.md"), STATS)
    assert convert_string(".md")(VFile("readme.md"), STATS).include


def test_list_returns_first_decision() -> None:
    """Verify list tests short-circuit on the first element with a decision."""
    calls: list[str] = []

    def first(file, stats):
        calls.append("first")
        return BREAK

    def second(file, stats):
        calls.append("second")
        return INCLUDE

    predicate = convert([lambda file, stats: None, first, second])

    assert predicate(VFile("a.txt"), STATS) == VisitOutcome(break_=True)
    assert calls == ["first"]


def test_list_without_decision_does_not_add_default_skip() -> None:
    """Verify lists only skip hidden entries through their string elements."""
    predicate = convert([lambda file, stats: False])

    assert predicate(VFile(".hidden"), STATS) == VisitOutcome()


def test_nested_lists_are_supported() -> None:
    """Verify list elements may themselves be lists."""
    predicate = convert([["!"], [".json"]])

    assert predicate(VFile("foo.json"), STATS).include


@pytest.mark.parametrize("test", [42, None, 1.5, [".md", object()]])
def test_convert_rejects_unsupported_tests(test: object) -> None:
    """Verify malformed tests are rejected before searching."""
    with pytest.raises(TypeError):
        convert(test)


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        (None, VisitOutcome()),
        (False, VisitOutcome()),
        (0, VisitOutcome()),
        (True, VisitOutcome(include=True)),
        (INCLUDE, VisitOutcome(include=True)),
        (INCLUDE | SKIP, VisitOutcome(include=True, skip=True)),
        (SKIP | BREAK, VisitOutcome(skip=True, break_=True)),
        ({"include": True, "break": True}, VisitOutcome(include=True, break_=True)),
        ({"skip": 1}, VisitOutcome(skip=True)),
        (VisitOutcome(break_=True), VisitOutcome(break_=True)),
    ],
)
def test_normalize_result(result: object, expected: VisitOutcome) -> None:
    """Verify every supported predicate return style maps to an outcome."""
    assert normalize_result(result) == expected


def test_normalize_result_rejects_unknown_types() -> None:
    """Verify unsupported predicate results raise TypeError."""
    with pytest.raises(TypeError):
        normalize_result("include")
