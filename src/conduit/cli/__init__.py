"""Conduit CLI — inspect a provider's routing table.

Entry point registered as ``conduit`` in ``pyproject.toml``::

    [project.scripts]
    conduit = "conduit.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``conduit`` command."""
    parser = argparse.ArgumentParser(
        prog="conduit",
        description="Conduit — identifier routing and CRUD dispatch for table-backed resources.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- conduit routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "provider",
        help="Import string (e.g. myapp:provider)",
    )

    # -- conduit resolve --------------------------------------------------
    resolve_parser = subparsers.add_parser(
        "resolve", help="Show which route and content type an identifier resolves to"
    )
    resolve_parser.add_argument(
        "provider",
        help="Import string (e.g. myapp:provider)",
    )
    resolve_parser.add_argument(
        "identifier",
        help="Identifier to resolve (e.g. content://com.example.notes/note/42)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from conduit.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from conduit.cli._match import run_resolve

        run_resolve(args)
