"""``htmlroute run`` — serve the configured routes locally."""

import argparse
import sys
from dataclasses import replace

from htmlroute.app import App
from htmlroute.cli._resolve import resolve_config
from htmlroute.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Build an App from config and start the development server.

    ``--host``/``--port`` override the config; ``--production`` forces
    production mode on.
    """
    config = resolve_config(args.config)
    if args.production:
        config = replace(config, production=True)

    try:
        app = App(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = args.host if args.host is not None else config.host
    port = args.port if args.port is not None else config.port

    from htmlroute.server.dev import run_dev_server

    run_dev_server(app, host, port, log_level=config.log_level)
