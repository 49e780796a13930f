"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, no string-key
dict lookups.  ``load_config()`` builds one from an optional TOML file
and ``HTMLROUTE_*`` environment variables.
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from htmlroute.errors import ConfigurationError
from htmlroute.routing.route import RouteSpec

ENV_MODE = "HTMLROUTE_ENV"
ENV_ROOT = "HTMLROUTE_ROOT"
ENV_HOST = "HTMLROUTE_HOST"
ENV_PORT = "HTMLROUTE_PORT"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(
            root_dir="./public",
            routes=(RouteSpec("/", "index.html"), RouteSpec("/users/:id", "user.html")),
            production=True,
        )
    """

    # Content
    root_dir: str | Path = "html"
    routes: tuple[RouteSpec, ...] = (RouteSpec(pattern="/", file="index.html"),)

    # Responses
    production: bool = False  # Hide internal detail and file references in error pages
    default_headers: tuple[tuple[str, str], ...] = ()

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"


def _routes_from(raw: Any) -> tuple[RouteSpec, ...]:
    if not isinstance(raw, list):
        msg = "'routes' must be an array of tables with 'pattern' and 'file'."
        raise ConfigurationError(msg)
    specs: list[RouteSpec] = []
    for entry in raw:
        if not isinstance(entry, Mapping) or not {"pattern", "file"} <= entry.keys():
            msg = f"Route entries need 'pattern' and 'file' keys, got {entry!r}."
            raise ConfigurationError(msg)
        specs.append(RouteSpec(pattern=str(entry["pattern"]), file=str(entry["file"])))
    return tuple(specs)


def _expect(table: Mapping[str, Any], key: str, kind: type, label: str) -> Any:
    value = table[key]
    # bool is an int subclass; a TOML "true" is never a port
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"'{key}' must be {label}, got {value!r}."
        raise ConfigurationError(msg)
    return value


def _from_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        msg = f"Config file not found: {path}"
        raise ConfigurationError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc

    values: dict[str, Any] = {}
    if "root_dir" in data:
        root = Path(_expect(data, "root_dir", str, "a string"))
        # Relative roots are relative to the config file, not the cwd
        values["root_dir"] = root if root.is_absolute() else path.parent / root
    if "production" in data:
        values["production"] = _expect(data, "production", bool, "true or false")
    if "routes" in data:
        values["routes"] = _routes_from(data["routes"])
    headers = data.get("headers", {})
    if not isinstance(headers, Mapping):
        msg = "'headers' must be a table of header names to values."
        raise ConfigurationError(msg)
    if headers:
        values["default_headers"] = tuple((str(k), str(v)) for k, v in headers.items())
    server = data.get("server", {})
    if not isinstance(server, Mapping):
        msg = "'server' must be a table with host, port and log_level."
        raise ConfigurationError(msg)
    for key, kind, label in (
        ("host", str, "a string"),
        ("port", int, "an integer"),
        ("log_level", str, "a string"),
    ):
        if key in server:
            values[key] = _expect(server, key, kind, label)
    return values


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        msg = f"Port must be an integer, got {value!r}."
        raise ConfigurationError(msg) from exc
    if not 0 <= port <= 65535:
        msg = f"Port out of range: {port}."
        raise ConfigurationError(msg)
    return port


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Build an ``AppConfig`` from a TOML file and the environment.

    Environment variables win over the file:

    - ``HTMLROUTE_ENV=production`` turns on production mode
    - ``HTMLROUTE_ROOT`` sets the root directory
    - ``HTMLROUTE_HOST`` / ``HTMLROUTE_PORT`` set the bind address

    Raises ``ConfigurationError`` for unreadable or malformed input.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = _from_toml(Path(path)) if path is not None else {}

    mode = env.get(ENV_MODE)
    if mode:
        values["production"] = mode.strip().lower() == "production"
    if env.get(ENV_ROOT):
        values["root_dir"] = env[ENV_ROOT]
    if env.get(ENV_HOST):
        values["host"] = env[ENV_HOST]
    if env.get(ENV_PORT):
        values["port"] = env[ENV_PORT]

    if "port" in values:
        values["port"] = _parse_port(values["port"])
    return replace(AppConfig(), **values)
