"""Response envelope and formatter.

``Response`` is immutable; ``.with_*()`` calls return new instances.
``ResponseFormatter`` builds success, redirect and error envelopes on
top of a fixed set of default headers chosen at construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from htmlroute.server.error_page import render_error_page

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "text/html; charset=utf-8",
    "Cache-Control": "public, max-age=3600",
    "X-Powered-By": "htmlroute",
}

NO_CACHE = "no-cache"


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings left to right; later layers win.

    Names compare case-insensitively and the later spelling is kept.
    """
    merged: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for name, value in layer.items():
            for existing in [k for k in merged if k.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value
    return merged


@dataclass(frozen=True, slots=True)
class Response:
    """A complete response envelope: status, headers and body."""

    body: str = ""
    status: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)
    is_binary: bool = False

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with *name* set, replacing any existing value."""
        return replace(self, headers=merge_headers(self.headers, {name: value}))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with *headers* merged over the current ones."""
        return replace(self, headers=merge_headers(self.headers, headers))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def to_dict(self) -> dict[str, Any]:
        """Serverless-style envelope consumed by platform adapters."""
        return {
            "statusCode": self.status,
            "headers": dict(self.headers),
            "body": self.body,
            "isBase64Encoded": self.is_binary,
        }


class ResponseFormatter:
    """Builds response envelopes with a fixed set of default headers.

    Defaults merge over ``DEFAULT_HEADERS``::

        formatter = ResponseFormatter({"Cache-Control": "no-store"})
        formatter.success("<h1>Hi</h1>").headers["Cache-Control"]  # "no-store"
    """

    __slots__ = ("_defaults",)

    def __init__(self, default_headers: Mapping[str, str] | None = None) -> None:
        self._defaults = merge_headers(DEFAULT_HEADERS, default_headers)

    @property
    def default_headers(self) -> dict[str, str]:
        """A copy of the headers applied to every success response."""
        return dict(self._defaults)

    def with_default_headers(self, headers: Mapping[str, str]) -> ResponseFormatter:
        """Return a new formatter whose defaults include *headers*."""
        return ResponseFormatter(merge_headers(self._defaults, headers))

    def success(
        self,
        body: str,
        headers: Mapping[str, str] | None = None,
        status: int = 200,
    ) -> Response:
        return Response(body=body, status=status, headers=merge_headers(self._defaults, headers))

    def redirect(self, location: str, status: int = 302) -> Response:
        return Response(
            body="",
            status=status,
            headers={"Location": location, "Cache-Control": NO_CACHE},
        )

    def error(
        self,
        status: int,
        message: str,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Render an HTML error page. Caching is disabled unless *headers* override it."""
        return Response(
            body=render_error_page(status, message),
            status=status,
            headers=merge_headers(self._defaults, {"Cache-Control": NO_CACHE}, headers),
        )
