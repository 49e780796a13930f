"""ASGI handler — the only component that touches raw HTTP scopes.

Pulls the decoded path out of the scope, runs it through
``App.handle()`` and sends the resulting envelope back.
"""

from typing import TYPE_CHECKING

from htmlroute._internal.asgi import Receive, Scope, Send
from htmlroute.server.sender import send_response

if TYPE_CHECKING:
    from htmlroute.app import App


async def handle_request(app: "App", scope: Scope, receive: Receive, send: Send) -> None:
    """Process a single HTTP request."""
    if scope["type"] != "http":
        return

    response = await app.handle(scope.get("path") or "/")
    await send_response(response, send, include_body=scope.get("method", "GET") != "HEAD")
