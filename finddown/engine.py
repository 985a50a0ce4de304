"""Search engine implementation.

Walks downward from one or more roots, evaluating a predicate on every
path. Every stat and directory listing runs in a worker thread so sibling
branches make progress concurrently; the event loop itself is the only
writer of the shared search state.
"""

from __future__ import annotations

import asyncio
import os
import stat
from collections.abc import Awaitable
from time import perf_counter
from typing import Any, Callable

from loguru import logger

from finddown import filesystem
from finddown.filesystem import PathArg
from finddown.models import Predicate, SearchState, VFile
from finddown.predicates import convert
from finddown.predicates.basic import Test

Paths = PathArg | list[PathArg] | tuple[PathArg, ...] | None
Callback = Callable[[BaseException | None, Any], None]

# Strong references to callback-driven searches running inside a loop.
_pending: set[asyncio.Task] = set()


async def _visit(state: SearchState, path: str) -> list[VFile]:
    """Visit one path and, when allowed, everything below it."""
    if not state.claim(filesystem.visit_key(path)):
        return []

    stats = await filesystem.stat_path(path)
    if stats is None or state.terminated:
        return []

    file = VFile(path)
    try:
        outcome = state.test(file, stats)
    except Exception:
        state.terminate()
        raise
    results: list[VFile] = []

    if outcome.include:
        results.append(file)
        if state.want_first:
            logger.debug(f"First match accepted: {path}")
            state.terminate()
            return results

    if outcome.break_:
        logger.debug(f"Search stopped at: {path}")
        state.terminate()

    if state.terminated or not stat.S_ISDIR(stats.st_mode) or outcome.skip:
        return results

    entries = await filesystem.list_directory(path)
    results.extend(await _visit_all(state, entries, path))
    return results


async def _visit_all(
    state: SearchState, paths: list[str], base: str | None = None
) -> list[VFile]:
    """Visit ``paths`` concurrently and join their results in argument order."""
    branches = [
        _visit(state, os.path.join(base, path) if base is not None else path)
        for path in paths
    ]
    results: list[VFile] = []
    for files in await asyncio.gather(*branches):
        results.extend(files)
    return results


async def _find(predicate: Predicate, paths: Paths, want_first: bool) -> list[VFile]:
    """Run one search with fresh state and return every collected file."""
    started_at = perf_counter()
    state = SearchState(test=predicate, want_first=want_first)
    roots = filesystem.normalize_roots(paths)

    results = await _visit_all(state, roots)

    duration_ms = int((perf_counter() - started_at) * 1000)
    logger.debug(
        f"Searched {len(state.visited)} paths from {len(roots)} roots: "
        f"{len(results)} matches in {duration_ms} ms"
    )
    return results


async def _find_first(predicate: Predicate, paths: Paths) -> VFile | None:
    files = await _find(predicate, paths, want_first=True)
    return files[0] if files else None


def _settle(awaitable: Awaitable[Any], callback: Callback) -> None:
    """Drive ``awaitable`` to completion and report through ``callback``."""

    async def run() -> None:
        try:
            result = await awaitable
        except Exception as exc:
            callback(exc, None)
        else:
            callback(None, result)

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(run())
        return

    task = loop.create_task(run())
    _pending.add(task)
    task.add_done_callback(_pending.discard)


def _split_arguments(
    paths: Paths | Callback, callback: Callback | None
) -> tuple[Paths, Callback | None]:
    if callable(paths):
        if callback is not None:
            raise TypeError("Got a callback both in place of paths and as callback")
        return None, paths
    return paths, callback


def find_down(
    test: Test,
    paths: Paths | Callback = None,
    callback: Callback | None = None,
) -> Awaitable[VFile | None] | None:
    """Find the first file or directory downwards.

    Args:
        test: What to look for. A string matches a basename or extension
            (hidden entries and ``node_modules`` are not searched), a callable
            receives ``(file, stats)`` and returns a decision, and a list
            matches when any of its tests does.
        paths: Where to search from; defaults to the current directory. A
            callable here is taken as ``callback``, in which case
            ``callback`` itself must be omitted.
        callback: Optional ``callback(error, file)`` called when done.

    Returns:
        An awaitable resolving to the first match or None, or None when a
        callback is given.
    """
    paths, callback = _split_arguments(paths, callback)
    awaitable = _find_first(convert(test), paths)
    if callback is None:
        return awaitable
    _settle(awaitable, callback)
    return None


def find_down_all(
    test: Test,
    paths: Paths | Callback = None,
    callback: Callback | None = None,
) -> Awaitable[list[VFile]] | None:
    """Find every matching file or directory downwards.

    Takes the same arguments as :func:`find_down`.

    Returns:
        An awaitable resolving to the list of matches, or None when a
        callback is given.
    """
    paths, callback = _split_arguments(paths, callback)
    awaitable = _find(convert(test), paths, want_first=False)
    if callback is None:
        return awaitable
    _settle(awaitable, callback)
    return None
