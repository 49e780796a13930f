"""htmlroute CLI — route table inspection and the local server.

Entry point registered as ``htmlroute`` in ``pyproject.toml``::

    [project.scripts]
    htmlroute = "htmlroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``htmlroute`` command."""
    parser = argparse.ArgumentParser(
        prog="htmlroute",
        description="htmlroute — map request paths to static HTML files.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- htmlroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes")
    routes_parser.add_argument("--config", default=None, help="Path to a TOML config file")

    # -- htmlroute run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the local server")
    run_parser.add_argument("--config", default=None, help="Path to a TOML config file")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Hide internal error detail from responses",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from htmlroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from htmlroute.cli._run import run_server

        run_server(args)
