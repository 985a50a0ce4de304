"""Filesystem primitives used by the downward search."""

from __future__ import annotations

import asyncio
import os
from typing import Union

from loguru import logger

PathArg = Union[str, os.PathLike]


def normalize_roots(paths: PathArg | list[PathArg] | tuple[PathArg, ...] | None) -> list[str]:
    """Return the list of roots to search from.

    Args:
        paths: A single path, a sequence of paths, or None for the current
            working directory.

    Returns:
        Root paths as strings, in the order given. An empty path stands for
        the current directory.
    """
    if paths is None:
        return [os.getcwd()]
    if isinstance(paths, (str, os.PathLike)):
        paths = [paths]
    return [os.fspath(path) or os.curdir for path in paths]


def visit_key(path: str) -> str:
    """Return the key used to deduplicate visits of ``path``."""
    return os.path.abspath(path)


async def stat_path(path: str) -> os.stat_result | None:
    """Stat ``path`` in a worker thread, following symlinks.

    Returns:
        The stat result, or None when the path cannot be stat'd.
    """
    try:
        return await asyncio.to_thread(os.stat, os.path.abspath(path))
    except OSError as exc:
        logger.debug(f"Ignoring unreadable path: {path} ({exc})")
        return None


async def list_directory(path: str) -> list[str]:
    """List entry names of ``path`` in a worker thread.

    Returns:
        Entry names sorted by name, or an empty list when the directory
        cannot be read.
    """
    try:
        entries = await asyncio.to_thread(os.listdir, path)
    except OSError as exc:
        logger.debug(f"Ignoring unlistable directory: {path} ({exc})")
        return []
    return sorted(entries)
