"""Local development server.

Starts a pounce ASGI server with a live htmlroute App object.
"""

from htmlroute.app import App


def run_dev_server(
    app: App,
    host: str,
    port: int,
    *,
    log_level: str = "info",
) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but we have a live
    ``App`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.

    Args:
        app: ASGI callable (htmlroute App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: Forwarded to pounce's logging setup.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
