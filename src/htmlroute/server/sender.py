"""ASGI response sending — translates a Response envelope to ASGI messages."""

import base64

from htmlroute._internal.asgi import Send
from htmlroute.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def body_bytes(response: Response) -> bytes:
    """Decode the envelope body; binary bodies travel base64-encoded."""
    if response.is_binary:
        return base64.b64decode(response.body)
    return response.body.encode("utf-8")


async def send_response(response: Response, send: Send, *, include_body: bool = True) -> None:
    """Translate a Response into ASGI send() calls.

    ``include_body=False`` answers HEAD requests: headers, including the
    real Content-Length, but no body.
    """
    body = body_bytes(response) if _body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers.items()
        if name.lower() != "content-length"
    ]
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body if include_body else b"",
        }
    )
