"""Shared fixtures for search tests."""

from pathlib import Path

import pytest
from loguru import logger

FIXTURE_FILES = [
    "foo.json",
    "quuuux.md",
    ".test",
    "foo/quuux.md",
    "foo/bar/quux.md",
    "foo/bar/baz/qux.md",
    "bar/baaaz.md",
    "bar/foo/baaz.md",
    "bar/foo/bar/baz.md",
]


def build_tree(root: Path, files: list[str]) -> Path:
    """Create empty files (and their parent directories) under ``root``."""
    for relative in files:
        file_path = root / relative
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text("", encoding="utf-8")
    return root


@pytest.fixture
def fixture_root(tmp_path: Path) -> Path:
    """Return a small tree of markdown and json files."""
    return build_tree(tmp_path / "fixture", FIXTURE_FILES)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks a CLI test bound to captured streams."""
    yield
    logger.remove()
    logger.disable("finddown")
