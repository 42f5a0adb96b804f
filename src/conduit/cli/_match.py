"""``conduit resolve`` — show where an identifier routes.

Exits with status 1 when the identifier matches no route.
"""

import argparse
import sys

from conduit.cli._resolve import load_provider


def run_resolve(args: argparse.Namespace) -> None:
    provider = load_provider(args.provider)

    match = provider.router.match(args.identifier)
    if match is None:
        print(f"No route matches {args.identifier!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"code:         {match.code}")
    print(f"kind:         {match.cardinality.name.lower()}")
    print(f"pattern:      {match.entry.pattern}")
    print(f"table:        {match.table.table_name}")
    print(f"entity:       {match.entry.entity_type.__name__}")
    if match.item_id is not None:
        print(f"id:           {match.item_id}")
    print(f"content type: {provider.get_type(args.identifier)}")
