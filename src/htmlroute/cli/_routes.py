"""``htmlroute routes`` — list the compiled route table.

Prints KIND, PATTERN and FILE for every route in declaration order.
"""

import argparse
import sys

from htmlroute.cli._resolve import resolve_config
from htmlroute.errors import ConfigurationError
from htmlroute.routing.router import Router


def run_routes(args: argparse.Namespace) -> None:
    config = resolve_config(args.config)
    try:
        router = Router(config.routes)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [(route.kind.value, route.pattern, route.file) for route in routes]
    max_kind = max(max(len(r[0]) for r in rows), 4)  # "KIND" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_kind}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("KIND", "PATTERN", "FILE"))
    sep_len = max_kind + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for kind, pattern, file in rows:
        print(fmt.format(kind, pattern, file))
