"""The htmlroute application — path in, response envelope out.

``App.handle()`` runs the whole pipeline for one request path:
route matching, safe file read, and response or error formatting.
``App`` is also an ASGI application for local serving.
"""

import logging
from pathlib import Path

from htmlroute._internal.asgi import Receive, Scope, Send
from htmlroute.config import AppConfig
from htmlroute.errors import FailureKind, RouteFailure
from htmlroute.files.reader import SafeFileReader
from htmlroute.http.response import Response, ResponseFormatter
from htmlroute.routing.router import Router
from htmlroute.server.errors import ErrorClassifier
from htmlroute.server.handler import handle_request

logger = logging.getLogger("htmlroute.server")


class App:
    """Serves HTML files from a root directory according to a route table.

    Basic usage::

        app = App(AppConfig(root_dir="./html", routes=(RouteSpec("/", "index.html"),)))
        response = await app.handle("/")
        response.status   # 200

    The router, reader and formatter are built from the config unless
    passed in explicitly.
    """

    __slots__ = ("classifier", "config", "formatter", "reader", "router")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        router: Router | None = None,
        reader: SafeFileReader | None = None,
        formatter: ResponseFormatter | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.router = router if router is not None else Router(self.config.routes)
        self.reader = reader if reader is not None else SafeFileReader(self.config.root_dir)
        self.formatter = (
            formatter
            if formatter is not None
            else ResponseFormatter(dict(self.config.default_headers))
        )
        self.classifier = ErrorClassifier(self.formatter, production=self.config.production)

    async def handle(self, path: str) -> Response:
        """Serve *path*. Never raises; failures become error responses."""
        logger.info("Received request for path: %s", path)
        try:
            match = self.router.match(path)
            logger.info("Matched route: %s -> %s", match.route.pattern, match.route.file)
            body = await self.reader.read(match.route.file)
        except RouteFailure as exc:
            if exc.kind is FailureKind.FILE_NOT_FOUND:
                logger.warning("Route file missing under %s: %s", self.reader.root, exc.file)
            return self.classifier.classify(exc)
        except Exception as exc:
            return self.classifier.classify(exc)
        return self.formatter.success(body)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        await handle_request(self, scope, receive, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                root = Path(self.reader.root)
                if not root.is_dir():
                    logger.warning("Root directory does not exist: %s", root)
                logger.info("Serving %d routes from %s", len(self.router.routes), root)
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
