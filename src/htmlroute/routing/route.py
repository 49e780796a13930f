"""RouteSpec, Route and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass
from enum import Enum


class RouteKind(Enum):
    """How a route pattern is matched.

    Static:   ``/about``        exact string equality
    Dynamic:  ``/users/:id``    anchored regex, named segment captures
    Wildcard: ``/docs/*``       regex anchored at the start only
    """

    STATIC = "static"
    DYNAMIC = "dynamic"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """A declarative ``{pattern, file}`` entry from configuration."""

    pattern: str
    file: str


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route rule.

    ``pattern`` keeps the declared text; ``matcher`` is ``None`` for
    static routes. ``param_names`` lines up positionally with the
    matcher's capture groups.
    """

    pattern: str
    file: str
    kind: RouteKind
    matcher: re.Pattern[str] | None = None
    param_names: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]

    @property
    def file(self) -> str:
        return self.route.file
