"""htmlroute exception hierarchy.

Shared across Router, SafeFileReader, App, and the error classifier so
every module raises and catches the same types.  Request-level failures
carry a ``FailureKind`` tag; the classifier dispatches on the tag, never
on message text.
"""

from dataclasses import dataclass
from enum import Enum


class FailureKind(Enum):
    """Why a request could not be served.

    The value doubles as the ``X-Error-Code`` response header.
    """

    NOT_FOUND = "NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_PATH = "INVALID_PATH"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class HTMLRouteError(Exception):
    """Base for all htmlroute-specific errors."""


class ConfigurationError(HTMLRouteError):
    """Raised when routes or settings are invalid.

    Typically raised while compiling the route table or loading config
    at startup.
    """


@dataclass(frozen=True, slots=True)
class RouteFailure(HTMLRouteError):
    """A user-triggerable failure that maps to an error response.

    Raised by the router and the file reader. ``file`` is the logical
    file reference involved, when there is one.
    """

    kind: FailureKind
    detail: str = ""
    file: str | None = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value


class NotFound(RouteFailure):  # noqa: N818 — conventional name in web frameworks
    """No route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(kind=FailureKind.NOT_FOUND, detail=detail)


class FileNotFound(RouteFailure):  # noqa: N818
    """A route matched but its file does not exist under the root."""

    def __init__(self, file: str) -> None:
        super().__init__(
            kind=FailureKind.FILE_NOT_FOUND,
            detail=f"HTML file not found: {file}",
            file=file,
        )


class InvalidPath(RouteFailure):  # noqa: N818
    """A file reference is absolute or escapes the root directory."""

    def __init__(self, file: str, detail: str = "Invalid path") -> None:
        super().__init__(kind=FailureKind.INVALID_PATH, detail=detail, file=file)


class Forbidden(RouteFailure):  # noqa: N818
    """Access to an existing resource is refused."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(kind=FailureKind.FORBIDDEN, detail=detail)
