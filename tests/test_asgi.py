"""Tests for the ASGI side of htmlroute.app.App."""

from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import pytest

from htmlroute.app import App
from htmlroute.config import AppConfig
from htmlroute.routing.route import RouteSpec


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
    }
    base.update(overrides)
    return base


class _Channel:
    """Feeds queued messages to receive() and records send() calls."""

    def __init__(self, *incoming: dict[str, Any]) -> None:
        self.incoming = list(incoming)
        self.sent: list[MutableMapping[str, Any]] = []

    async def receive(self) -> MutableMapping[str, Any]:
        return self.incoming.pop(0)

    async def send(self, message: MutableMapping[str, Any]) -> None:
        self.sent.append(message)


@pytest.fixture
def app(html_root: Path) -> App:
    return App(
        AppConfig(
            root_dir=html_root,
            routes=(RouteSpec("/", "index.html"), RouteSpec("/users/:id", "user.html")),
        )
    )


class TestHTTP:
    async def test_serves_page(self, app: App) -> None:
        ch = _Channel()
        await app(_make_scope(path="/users/7"), ch.receive, ch.send)

        start, body = ch.sent
        assert start["status"] == 200
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert body["body"] == b"<h1>User</h1>"

    async def test_not_found(self, app: App) -> None:
        ch = _Channel()
        await app(_make_scope(path="/nope"), ch.receive, ch.send)

        start, body = ch.sent
        assert start["status"] == 404
        assert dict(start["headers"])[b"x-error-code"] == b"NOT_FOUND"
        assert b"<h1>404</h1>" in body["body"]

    async def test_missing_file_with_non_ascii_name(self, html_root: Path) -> None:
        app = App(AppConfig(root_dir=html_root, routes=(RouteSpec("/p", "\u9875\u9762.html"),)))
        ch = _Channel()
        await app(_make_scope(path="/p"), ch.receive, ch.send)

        start, body = ch.sent
        assert start["status"] == 404
        headers = dict(start["headers"])
        assert headers[b"x-error-code"] == b"FILE_NOT_FOUND"
        assert headers[b"x-file-path"] == b"%E9%A1%B5%E9%9D%A2.html"
        assert "\u9875\u9762.html".encode() in body["body"]

    async def test_head(self, app: App) -> None:
        ch = _Channel()
        await app(_make_scope(method="HEAD"), ch.receive, ch.send)

        start, body = ch.sent
        assert start["status"] == 200
        assert dict(start["headers"])[b"content-length"] == b"13"
        assert body["body"] == b""

    async def test_matches_handle(self, app: App) -> None:
        ch = _Channel()
        await app(_make_scope(path="/users/7/"), ch.receive, ch.send)
        direct = await app.handle("/users/7/")
        assert ch.sent[0]["status"] == direct.status
        assert ch.sent[1]["body"] == direct.body.encode("utf-8")

    async def test_ignores_other_scopes(self, app: App) -> None:
        ch = _Channel()
        await app({"type": "websocket", "path": "/"}, ch.receive, ch.send)
        assert ch.sent == []


class TestLifespan:
    async def test_startup_and_shutdown(self, app: App) -> None:
        ch = _Channel({"type": "lifespan.startup"}, {"type": "lifespan.shutdown"})
        await app({"type": "lifespan"}, ch.receive, ch.send)
        assert [m["type"] for m in ch.sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_missing_root_still_starts(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = App(AppConfig(root_dir=tmp_path / "absent"))
        ch = _Channel({"type": "lifespan.startup"}, {"type": "lifespan.shutdown"})
        await app({"type": "lifespan"}, ch.receive, ch.send)
        assert ch.sent[0]["type"] == "lifespan.startup.complete"
        assert any("does not exist" in rec.getMessage() for rec in caplog.records)
