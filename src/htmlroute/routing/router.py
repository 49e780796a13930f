"""Compiled route table with static, dynamic and wildcard matching.

Routes are compiled once into an immutable ``RouteTable``.  Adding or
removing a route builds a new table and swaps the reference, so a match
in flight always sees one complete table.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import cast

from htmlroute.errors import ConfigurationError, NotFound
from htmlroute.routing.route import Route, RouteKind, RouteMatch, RouteSpec

logger = logging.getLogger("htmlroute.routing")

# ``:name`` segment or ``*`` wildcard
_TOKEN = re.compile(r":(\w+)|\*")

_SEGMENT = r"([^/]+)"
_REMAINDER = r"(.*)"


def normalize_path(path: str) -> str:
    """Collapse leading slashes to one and strip trailing slashes.

    Examples::

        ""            -> "/"
        "//"          -> "/"
        "users/42/"   -> "/users/42"
        "///docs//"   -> "/docs"
    """
    normalized = ("/" + path.lstrip("/")).rstrip("/")
    return normalized or "/"


def _wildcard_name(index: int) -> str:
    return "wildcard" if index == 1 else f"wildcard{index}"


def compile_route(spec: RouteSpec) -> Route:
    """Compile a declarative route entry into a matchable ``Route``.

    Raises ``ConfigurationError`` for empty patterns or files, a ``:``
    without a parameter name, or a parameter name used twice.
    """
    if not spec.pattern:
        msg = f"Route pattern must not be empty (file {spec.file!r})."
        raise ConfigurationError(msg)
    if not spec.file:
        msg = f"Route {spec.pattern!r} has no file."
        raise ConfigurationError(msg)

    pattern = normalize_path(spec.pattern)
    if ":" not in pattern and "*" not in pattern:
        return Route(pattern=spec.pattern, file=spec.file, kind=RouteKind.STATIC)

    kind = RouteKind.DYNAMIC if ":" in pattern else RouteKind.WILDCARD
    parts: list[str] = []
    names: list[str] = []
    stars = 0
    pos = 0
    for token in _TOKEN.finditer(pattern):
        literal = pattern[pos : token.start()]
        if ":" in literal:
            msg = f"Route {spec.pattern!r} has a ':' without a parameter name."
            raise ConfigurationError(msg)
        parts.append(re.escape(literal))
        if token.group(1) is not None:
            name = token.group(1)
            parts.append(_SEGMENT)
        else:
            stars += 1
            name = _wildcard_name(stars)
            parts.append(_REMAINDER)
        if name in names:
            msg = f"Route {spec.pattern!r} declares {name!r} more than once."
            raise ConfigurationError(msg)
        names.append(name)
        pos = token.end()

    tail = pattern[pos:]
    if ":" in tail:
        msg = f"Route {spec.pattern!r} has a ':' without a parameter name."
        raise ConfigurationError(msg)
    parts.append(re.escape(tail))

    body = "".join(parts)
    source = f"^{body}$" if kind is RouteKind.DYNAMIC else f"^{body}"
    return Route(
        pattern=spec.pattern,
        file=spec.file,
        kind=kind,
        matcher=re.compile(source),
        param_names=tuple(names),
    )


def _as_spec(entry: RouteSpec | Mapping[str, str]) -> RouteSpec:
    if isinstance(entry, RouteSpec):
        return entry
    try:
        return RouteSpec(pattern=entry["pattern"], file=entry["file"])
    except (KeyError, TypeError) as exc:
        msg = f"Route entries need 'pattern' and 'file' keys, got {entry!r}."
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True, slots=True)
class RouteTable:
    """Immutable compiled route table.

    ``routes`` keeps declaration order.  ``static`` maps each normalized
    static pattern to the first route declaring it; ``dynamic`` and
    ``wildcard`` keep declaration order within their kind.
    """

    routes: tuple[Route, ...] = ()
    static: dict[str, Route] = field(default_factory=dict)
    dynamic: tuple[Route, ...] = ()
    wildcard: tuple[Route, ...] = ()

    @classmethod
    def build(cls, routes: Iterable[Route]) -> RouteTable:
        ordered = tuple(routes)
        static: dict[str, Route] = {}
        for route in ordered:
            if route.kind is RouteKind.STATIC:
                static.setdefault(normalize_path(route.pattern), route)
            elif route.matcher is None:
                msg = f"{route.kind.value} route {route.pattern!r} has no compiled matcher."
                raise ConfigurationError(msg)
        return cls(
            routes=ordered,
            static=static,
            dynamic=tuple(r for r in ordered if r.kind is RouteKind.DYNAMIC),
            wildcard=tuple(r for r in ordered if r.kind is RouteKind.WILDCARD),
        )

    def lookup(self, path: str) -> RouteMatch | None:
        """Match an already-normalized path.

        Static routes win, then the first matching dynamic route, then
        the first matching wildcard route.
        """
        route = self.static.get(path)
        if route is not None:
            return RouteMatch(route=route, params={})

        for route in self.dynamic:
            m = cast(re.Pattern[str], route.matcher).fullmatch(path)
            if m is not None:
                return RouteMatch(route=route, params=dict(zip(route.param_names, m.groups())))

        for route in self.wildcard:
            m = cast(re.Pattern[str], route.matcher).match(path)
            if m is not None:
                return RouteMatch(route=route, params=dict(zip(route.param_names, m.groups())))

        return None


class Router:
    """Path matcher over a compiled, swappable route table.

    Usage::

        router = Router([
            RouteSpec("/", "index.html"),
            RouteSpec("/users/:id", "user.html"),
            RouteSpec("/docs/*", "docs.html"),
        ])
        match = router.match("/users/42")
        match.route.file   # "user.html"
        match.params       # {"id": "42"}
    """

    __slots__ = ("_lock", "_table")

    def __init__(self, routes: Iterable[RouteSpec | Mapping[str, str]] = ()) -> None:
        self._lock = threading.Lock()
        self._table = RouteTable.build(compile_route(_as_spec(entry)) for entry in routes)

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def routes(self) -> tuple[Route, ...]:
        """All compiled routes in declaration order."""
        return self._table.routes

    def add(self, entry: RouteSpec | Mapping[str, str]) -> Route:
        """Append a route. Only the new route is compiled."""
        route = compile_route(_as_spec(entry))
        with self._lock:
            self._table = RouteTable.build((*self._table.routes, route))
        logger.debug("Added route %s -> %s (%s)", route.pattern, route.file, route.kind.value)
        return route

    def remove(self, pattern: str) -> bool:
        """Remove every route declared with *pattern* and recompile the rest.

        Patterns are compared after normalization. Returns ``True`` if
        anything was removed.
        """
        target = normalize_path(pattern)
        with self._lock:
            current = self._table.routes
            kept = [
                RouteSpec(pattern=r.pattern, file=r.file)
                for r in current
                if normalize_path(r.pattern) != target
            ]
            if len(kept) == len(current):
                return False
            self._table = RouteTable.build(compile_route(spec) for spec in kept)
        logger.debug("Removed route %s", pattern)
        return True

    def find(self, path: str) -> RouteMatch | None:
        """Match *path* against the current table, or return ``None``."""
        return self._table.lookup(normalize_path(path))

    def match(self, path: str) -> RouteMatch:
        """Match *path* against the current table.

        Raises ``NotFound`` if no route matches.
        """
        result = self.find(path)
        if result is None:
            raise NotFound(f"No route matches {path!r}")
        return result
