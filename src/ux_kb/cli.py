"""Command-line interface for populating, checking and querying the knowledge base.

Usage:
    ux-kb populate [--file entries.json | --patterns patterns.json] [--delay 0.1]
    ux-kb verify
    ux-kb smoke [--query "button design usability"]
    ux-kb search "checkout form errors" [--limit 5] [--threshold 0.3]
    ux-kb serve
"""

import argparse
import asyncio
import logging
import sys

from ux_kb.config import get_log_level
from ux_kb.errors import ConfigurationError, StoreConnectionError
from ux_kb.services import Services, create_services

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else getattr(logging, get_log_level(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _print_progress(index: int, total: int, title: str, outcome: str) -> None:
    print(f"[{index}/{total}] {outcome:<7} {title}")


async def cmd_populate(services: Services, args: argparse.Namespace) -> int:
    """Load entries (or competitor patterns) and ingest them, one progress line per item."""
    from ux_kb.ingest.pipeline import load_entries_file, load_patterns_file
    from ux_kb.ingest.seed_data import CORE_UX_KNOWLEDGE

    try:
        if args.patterns:
            items = load_patterns_file(args.patterns)
        else:
            items = load_entries_file(args.file) if args.file else CORE_UX_KNOWLEDGE
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if args.delay is not None:
        services.pipeline.delay = args.delay

    if args.patterns:
        print(f"Populating competitor patterns with {len(items)} patterns...")
        result = await services.pipeline.run_patterns(items, progress=_print_progress)
    else:
        print(f"Populating knowledge base with {len(items)} entries...")
        result = await services.pipeline.run(items, progress=_print_progress)

    print("\nPopulation complete!")
    print(f"  Total:   {result.total_entries}")
    print(f"  Added:   {result.successfully_added}")
    print(f"  Skipped: {result.skipped}")
    print(f"  Failed:  {result.failed}")
    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for title, message in result.errors:
            print(f"  - {title}: {message}")
    return 0


async def cmd_verify(services: Services, args: argparse.Namespace) -> int:
    """Print the verification report; exit 0 only on PASS."""
    from ux_kb.diagnostics.verify import Verdict, format_report, verify_knowledge_base

    report = await verify_knowledge_base(services.store)
    print(format_report(report))
    return 0 if report.verdict is Verdict.PASS else 1


async def cmd_smoke(services: Services, args: argparse.Namespace) -> int:
    """Run the end-to-end smoke test; exit 0 only if every stage passes."""
    from ux_kb.diagnostics.smoke import run_smoke_test

    stages = await run_smoke_test(services, query=args.query, threshold=args.threshold)
    for stage in stages:
        print(f"{'PASS' if stage.passed else 'FAIL'}  {stage.name}: {stage.detail}")
    ok = all(s.passed for s in stages)
    print(f"\n{'All stages passed' if ok else 'Smoke test failed'}")
    return 0 if ok else 1


async def cmd_search(services: Services, args: argparse.Namespace) -> int:
    """Print the nearest entries to a query."""
    from ux_kb.models.search import SearchFilters
    from ux_kb.tools.formatters import format_result_list, format_search_result

    filters = SearchFilters(
        max_results=args.limit,
        confidence_threshold=args.threshold,
        categories=args.category or [],
        industries=args.industry or [],
    )
    results = await services.engine.search(args.query, filters)
    print(format_result_list([format_search_result(r) for r in results]))
    return 0


_COMMANDS = {
    "populate": cmd_populate,
    "verify": cmd_verify,
    "smoke": cmd_smoke,
    "search": cmd_search,
}


async def run_command(args: argparse.Namespace) -> int:
    """Open the services, run one command, and map fatal errors to exit code 1."""
    try:
        services = await create_services(args.db)
    except (StoreConnectionError, ConfigurationError) as e:
        logger.error("Startup failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        return await _COMMANDS[args.command](services, args)
    except StoreConnectionError as e:
        logger.error("Knowledge store unreachable: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await services.close()


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``ux-kb`` command."""
    parser = argparse.ArgumentParser(prog="ux-kb", description="UX research knowledge base")
    parser.add_argument("--db", help="SQLite database path (default: UX_KB_DB_PATH)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at INFO level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    populate = subparsers.add_parser("populate", help="Ingest knowledge entries")
    source = populate.add_mutually_exclusive_group()
    source.add_argument("--file", "-f", help="JSON array of entries (default: core dataset)")
    source.add_argument("--patterns", help="JSON array of competitor patterns")
    populate.add_argument("--delay", type=float, help="Seconds to wait between entries")

    subparsers.add_parser("verify", help="Report counts and embedding coverage")

    smoke = subparsers.add_parser("smoke", help="Run the end-to-end smoke test")
    smoke.add_argument("--query", "-q", default="button design usability")
    smoke.add_argument("--threshold", type=float, default=0.3)

    search = subparsers.add_parser("search", help="Similarity search")
    search.add_argument("query")
    search.add_argument("--limit", "-n", type=int, default=10)
    search.add_argument("--threshold", type=float, default=0.5)
    search.add_argument("--category", action="append", help="Repeatable category filter")
    search.add_argument("--industry", action="append", help="Repeatable industry filter")

    subparsers.add_parser("serve", help="Run the MCP server on stdio")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``ux-kb`` console script."""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        from ux_kb.server import create_server

        create_server().run(transport="stdio")
        return

    _configure_logging(args.verbose)
    sys.exit(asyncio.run(run_command(args)))


if __name__ == "__main__":
    main()
