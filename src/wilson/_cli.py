"""Wilson CLI — wilson build / wilson dev / wilson routes.

Entry point for the ``wilson`` command-line interface.
"""

from __future__ import annotations

import argparse
import json
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the wilson CLI."""
    parser = argparse.ArgumentParser(
        prog="wilson",
        description="Content-to-route resolution for file-based static sites.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # wilson build
    build_parser = subparsers.add_parser(
        "build",
        help="Export the route manifest and per-route props",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument("--page-size", type=int, default=None, help="Pagination chunk size")

    # wilson dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Resolve routes and keep them current as pages change",
    )
    dev_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    dev_parser.add_argument("--page-size", type=int, default=None, help="Pagination chunk size")

    # wilson routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the resolved routes",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    routes_parser.add_argument("--json", action="store_true", help="Print the manifest as JSON")
    routes_parser.add_argument("--page-size", type=int, default=None, help="Pagination chunk size")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from wilson import __version__

    return __version__


def _print_routes(root: str, *, as_json: bool, page_size: int | None) -> None:
    from wilson.engine import resolve_all

    table = resolve_all(root, page_size=page_size)
    entries = sorted(table.entries(), key=lambda e: (e.route, str(e.source_path)))
    if as_json:
        print(json.dumps([entry.as_dict() for entry in entries], indent=2, ensure_ascii=False))
        return
    width = max((len(entry.route) for entry in entries), default=0)
    for entry in entries:
        query = entry.query.to_string()
        suffix = f"?{query}" if query else ""
        print(f"{entry.route:<{width}}  {entry.source_path}{suffix}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from wilson._errors import WilsonError
    from wilson.engine import build, dev

    try:
        if args.command == "build":
            build(args.root, output=args.output, page_size=args.page_size)
        elif args.command == "dev":
            dev(args.root, page_size=args.page_size)
        elif args.command == "routes":
            _print_routes(args.root, as_json=args.json, page_size=args.page_size)
    except WilsonError as exc:
        print(f"wilson: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
