#!/usr/bin/env python3
"""Command-line interface for print-finder.

Usage:
    # Single search
    print-finder benchy

    # JSON output, same shape as GET /api/search
    print-finder --format json benchy

    # Only some sources
    print-finder --source Printables --source Makerworld "cable clip"

    # Interactive mode
    print-finder --interactive
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import TextIO

from print_finder.aggregator import aggregate, select_adapters
from print_finder.consts import API_VERSION
from print_finder.types.search import SearchResult, SearchSource
from print_finder.utils.logging import redirect_log_stream

# =============================================================================
# Output Formatting
# =============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"


SOURCE_COLORS = {
    SearchSource.PRINTABLES: Colors.YELLOW,
    SearchSource.THINGIVERSE: Colors.BLUE,
    SearchSource.MAKERWORLD: Colors.GREEN,
}


def supports_color() -> bool:
    """Check if terminal supports colors."""
    return (
        hasattr(sys.stdout, "isatty")
        and sys.stdout.isatty()
        and os.environ.get("TERM") != "dumb"
        and os.environ.get("NO_COLOR") is None
    )


def colorize(text: str, color: str) -> str:
    """Apply color if supported."""
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


def format_results_pretty(results: list[SearchResult], file: TextIO = sys.stdout) -> None:
    """Format results for human-readable terminal output."""
    print(colorize("=" * 60, Colors.DIM), file=file)
    print(colorize(f"{len(results)} results", Colors.BOLD), file=file)
    print(colorize("=" * 60, Colors.DIM), file=file)

    for i, result in enumerate(results, start=1):
        label = colorize(f"[{result.source.value}]", SOURCE_COLORS.get(result.source, Colors.RESET))
        byline = f" by {result.author}" if result.author else ""
        print(f"{i:>3}. {label} {result.title}{byline}", file=file)
        print(colorize(f"       {result.url}", Colors.DIM), file=file)

    if not results:
        print(colorize("No models found.", Colors.YELLOW), file=file)


def format_results_json(results: list[SearchResult], file: TextIO = sys.stdout) -> None:
    """Format results as JSON, matching the HTTP API body."""
    payload = [result.model_dump(mode="json", by_alias=True) for result in results]
    print(json.dumps(payload, indent=2, ensure_ascii=False), file=file)


# =============================================================================
# Execution Modes
# =============================================================================


def run_single_query(
    query: str,
    output_format: str = "pretty",
    sources: list[str] | None = None,
) -> int:
    """Run one aggregated search and display the results.

    Returns:
        Exit code (0 for success, 1 for error, 2 for an empty term).
    """
    query = query.strip()
    if not query:
        print("Error: search term cannot be empty", file=sys.stderr)
        return 2

    try:
        results = asyncio.run(aggregate(query, adapters=select_adapters(sources)))
    except KeyboardInterrupt:
        print("\n\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if output_format == "json":
        format_results_json(results)
    else:
        format_results_pretty(results)
    return 0


def run_interactive(sources: list[str] | None = None) -> int:
    """Run in interactive REPL mode.

    Returns:
        Exit code (0 for normal exit).
    """
    print(colorize("print-finder interactive mode", Colors.CYAN + Colors.BOLD))
    print("Type a search term. Commands: 'quit' to exit")
    print(colorize("-" * 44, Colors.DIM))

    while True:
        try:
            query = input(colorize("\n❯ ", Colors.GREEN)).strip()

            if not query:
                continue

            if query.lower() in ("quit", "exit", "q"):
                break

            run_single_query(query, "pretty", sources)

        except KeyboardInterrupt:
            print(colorize("\n\nInterrupted. Type 'quit' to exit.", Colors.YELLOW))
        except EOFError:
            break

    return 0


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="print-finder",
        description="Search Printables, Thingiverse and Makerworld for 3D-printable models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s benchy
  %(prog)s --format json "cable clip" > results.json
  %(prog)s --source Thingiverse --source Printables vase
  %(prog)s --interactive
        """,
    )

    parser.add_argument("query", nargs="?", help="Search term")

    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Run in interactive mode (REPL)",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["pretty", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )

    parser.add_argument(
        "-s",
        "--source",
        action="append",
        choices=[source.value for source in SearchSource],
        dest="sources",
        help="Restrict the search to this source (repeatable; default: all)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"print-finder {API_VERSION}",
    )

    args = parser.parse_args(argv)

    # stdout carries the results (possibly JSON); logs go to stderr
    redirect_log_stream(sys.stderr)

    if args.interactive:
        return run_interactive(args.sources)
    elif args.query is not None:
        return run_single_query(args.query, output_format=args.format, sources=args.sources)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
