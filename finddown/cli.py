"""Command-line interface for the downward file search."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from time import perf_counter
from typing import Any

from loguru import logger

from finddown import find_down, find_down_all


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line parser."""
    parser = argparse.ArgumentParser(description="Find files and directories downwards")
    parser.add_argument(
        "--path",
        action="append",
        help="Directory to search from (repeatable, default: current directory)",
    )
    parser.add_argument(
        "--test",
        action="append",
        required=True,
        help="Basename or extension to match, e.g. 'package.json' or '.md' (repeatable)",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="Stop at the first match",
    )
    parser.add_argument(
        "--format",
        choices=("json", "table"),
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--output",
        help="Optional file path to write output (overwrites existing file)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Configure loguru output for CLI messages."""
    logger.remove()
    logger.enable("finddown")
    logger.add(
        sys.stdout,
        level="DEBUG" if verbose else "INFO",
        format="{message}",
        filter=lambda record: record["level"].name in {"INFO", "DEBUG"},
    )
    logger.add(sys.stderr, level="WARNING", format="{message}")


def search(tests: list[str], paths: list[str] | None, first: bool) -> dict[str, Any]:
    """Run a search and return the result payload."""
    started_at = perf_counter()
    if first:
        found = asyncio.run(find_down(tests, paths))
        files = [found] if found is not None else []
    else:
        files = asyncio.run(find_down_all(tests, paths))
    duration_ms = int((perf_counter() - started_at) * 1000)

    return {
        "summary": {
            "roots": paths or [str(Path.cwd())],
            "matches_count": len(files),
            "duration_ms": duration_ms,
        },
        "matches": [file.path for file in files],
    }


def format_json_output(result: dict[str, Any]) -> str:
    """Render search result as pretty JSON."""
    return json.dumps(result, indent=2)


def format_table_output(result: dict[str, Any]) -> str:
    """Render search result as a human-readable listing."""
    summary = result.get("summary", {})
    roots = summary.get("roots", [])
    matches_count = summary.get("matches_count", 0)
    duration_ms = summary.get("duration_ms", 0)

    lines = [
        "=== Search Summary ===",
        f"Roots: {', '.join(roots)}",
        f"Matches: {matches_count}",
        f"Duration: {duration_ms} ms",
        "",
        "=== Matches ===",
        *result.get("matches", []),
    ]

    return "\n".join(lines)


def write_output_file(output_path: str, content: str) -> None:
    """Write rendered content to an output file, overwriting if it exists."""
    Path(output_path).write_text(f"{content}\n", encoding="utf-8")


def main() -> int:
    """Run the search CLI."""
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(verbose=args.verbose)

    if args.verbose:
        logger.debug(f"[DEBUG] Searching for: {', '.join(args.test)}")

    try:
        result = search(args.test, args.path, first=args.first)
    except Exception as exc:
        logger.error(f"Error: search failed: {exc}")
        return 1

    if args.format == "json":
        rendered_output = format_json_output(result)
    else:
        rendered_output = format_table_output(result)

    logger.info(rendered_output)

    if args.output:
        try:
            write_output_file(args.output, rendered_output)
        except OSError as exc:
            logger.error(f"Error: failed to write output file '{args.output}': {exc}")
            return 1
        if args.verbose:
            logger.debug(f"[DEBUG] Wrote output to: {args.output}")

    return 0 if result["summary"]["matches_count"] > 0 else 1


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
