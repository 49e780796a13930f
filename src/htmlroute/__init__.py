"""htmlroute — map request paths to static HTML files.

Routes are static (``/about``), dynamic (``/users/:id``) or wildcard
(``/docs/*``).  Every file reference is confined to a root directory,
and every failure becomes a complete error response.

Basic usage::

    from htmlroute import App, AppConfig, RouteSpec

    app = App(AppConfig(
        root_dir="./html",
        routes=(
            RouteSpec("/", "index.html"),
            RouteSpec("/users/:id", "user.html"),
            RouteSpec("/docs/*", "docs.html"),
        ),
    ))

    response = await app.handle("/users/42")
    response.to_dict()   # {"statusCode": 200, "headers": {...}, ...}
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "FailureKind",
    "FileNotFound",
    "Forbidden",
    "HTMLRouteError",
    "InvalidPath",
    "NotFound",
    "Response",
    "ResponseFormatter",
    "RouteFailure",
    "RouteSpec",
    "Router",
    "SafeFileReader",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import htmlroute`` fast while providing a clean top-level API.
    """
    if name == "App":
        from htmlroute.app import App

        return App

    if name in ("AppConfig", "load_config"):
        from htmlroute import config as _config

        return getattr(_config, name)

    if name in ("Response", "ResponseFormatter"):
        from htmlroute.http import response as _resp

        return getattr(_resp, name)

    if name == "RouteSpec":
        from htmlroute.routing.route import RouteSpec

        return RouteSpec

    if name == "Router":
        from htmlroute.routing.router import Router

        return Router

    if name == "SafeFileReader":
        from htmlroute.files.reader import SafeFileReader

        return SafeFileReader

    if name in (
        "ConfigurationError",
        "FailureKind",
        "FileNotFound",
        "Forbidden",
        "HTMLRouteError",
        "InvalidPath",
        "NotFound",
        "RouteFailure",
    ):
        from htmlroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
