"""Config resolution shared by ``htmlroute routes`` and ``htmlroute run``."""

import sys

from htmlroute.config import AppConfig, load_config
from htmlroute.errors import ConfigurationError


def resolve_config(path: str | None) -> AppConfig:
    """Load config from *path* and the environment, exiting on error."""
    try:
        return load_config(path)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
