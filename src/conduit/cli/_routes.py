"""``conduit routes`` — list registered routes.

Prints every route code with its cardinality, pattern, entity type and
content type, in code order.
"""

import argparse

from conduit.cli._resolve import load_provider


def run_routes(args: argparse.Namespace) -> None:
    provider = load_provider(args.provider)
    dispatcher = provider.dispatcher

    entries = dispatcher.router.entries
    if not entries:
        print("No routes registered.")
        return

    rows = [
        (
            str(entry.code),
            entry.cardinality.name.lower(),
            entry.pattern,
            entry.entity_type.__name__,
            dispatcher.mime_types.mime_type_for(entry.code, entry.table, entry.cardinality),
        )
        for entry in entries
    ]

    headers = ("CODE", "KIND", "PATTERN", "ENTITY", "CONTENT TYPE")
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers[:-1])]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 2 * len(widths) + len(headers[-1]), 80))
    for row in rows:
        print(fmt.format(*row))
