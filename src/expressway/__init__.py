"""Expressway — Express-style routes and middleware chains over a REST host.

Register ``(method, path template, middlewares)`` tuples; on every
request the matching chain runs in order and its result becomes the
response.

Basic usage::

    from expressway import Router, RestServer

    router = Router("shop/v1")

    def show_item(request, acc):
        return {"id": request.path_params["id"]}

    router.get("/items/:id", show_item)

    server = RestServer()
    router.mount(server)
    server.run()

Path parameters are numeric only: ``/items/:id`` matches ``/items/7``
but not ``/items/abc``.
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ExpresswayError",
    "Final",
    "FilterPoint",
    "HTTPError",
    "HostConfig",
    "Intermediate",
    "MethodNotAllowed",
    "Middleware",
    "NotFound",
    "Registry",
    "Request",
    "Response",
    "RestServer",
    "Route",
    "Router",
    "RouterConfig",
    "compile_template",
    "execute",
    "matches",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import expressway`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from expressway.router import Router

        return Router

    if name in ("RestServer", "FilterPoint"):
        from expressway.host import server as _server

        return getattr(_server, name)

    if name in ("RouterConfig", "HostConfig"):
        from expressway import config as _config

        return getattr(_config, name)

    if name == "Request":
        from expressway.http.request import Request

        return Request

    if name == "Response":
        from expressway.http.response import Response

        return Response

    if name in ("Middleware", "Final", "Intermediate"):
        from expressway.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "execute":
        from expressway.middleware.executor import execute

        return execute

    if name == "compile_template":
        from expressway.routing.template import compile_template

        return compile_template

    if name == "matches":
        from expressway.routing.matcher import matches

        return matches

    if name == "Route":
        from expressway.routing.route import Route

        return Route

    if name == "Registry":
        from expressway.routing.registry import Registry

        return Registry

    if name in (
        "ExpresswayError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
    ):
        from expressway import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
