"""changelog-query CLI entry point.

Usage: changelog-query query data.json --name ali --sort-key date
"""
import argparse
import logging
import sys

from changelog_query.config import ViewerConfig
from changelog_query.domain.fields import SORTABLE_FIELDS


def _add_query_parser(subparsers: argparse._SubParsersAction) -> None:
    defaults = ViewerConfig()
    p = subparsers.add_parser(
        "query",
        help="Filter, sort and page a JSON change-log dataset.",
    )
    p.add_argument("dataset", help="Path to a JSON array of records.")
    p.add_argument("--name", default="", help="Regex matched against name.")
    p.add_argument("--title", default="", help="Regex matched against title.")
    p.add_argument("--field", default="", help="Regex matched against field.")
    p.add_argument(
        "--date", default="",
        help="Exact ISO-8601 date or timestamp (e.g. 2023-01-01).",
    )
    p.add_argument(
        "--sort-key", choices=[f.value for f in SORTABLE_FIELDS],
        help="Column to sort by.",
    )
    p.add_argument(
        "--sort-type", choices=["asc", "dsc"],
        help="Sort direction (default: dsc when --sort-key is given).",
    )
    p.add_argument(
        "--limit", type=int, default=defaults.page_size,
        help=f"Records to show (default: {defaults.page_size})",
    )
    p.add_argument(
        "--verbose", action="store_true",
        help="Log index and evaluation details to stderr.",
    )


def _run_query(args: argparse.Namespace) -> int:
    from changelog_query.loader import load_records
    from changelog_query.query.pipeline import QueryPipeline
    from changelog_query.query.state import QueryState
    from changelog_query.report import format_result, format_skipped

    config = ViewerConfig(page_size=args.limit)
    params = {
        "name": args.name,
        "title": args.title,
        "field": args.field,
        "date": args.date,
    }
    if args.sort_key:
        params["sort_key"] = args.sort_key
    if args.sort_type:
        params["sort_type"] = args.sort_type
    state = QueryState.from_params(params, page_size=config.page_size)

    pipeline = QueryPipeline(load_records(args.dataset))
    if args.verbose and pipeline.skipped:
        print(format_skipped(pipeline.skipped), file=sys.stderr)

    print(format_result(pipeline.evaluate(state), config.page_size))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="changelog-query",
        description="Query a change-log snapshot by date, text pattern and sort order.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_query_parser(subparsers)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "query":
        if args.limit <= 0:
            parser.error("--limit must be a positive integer")
        sys.exit(_run_query(args))
