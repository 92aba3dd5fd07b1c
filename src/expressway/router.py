"""Express-style router.

Collects routes, hooks, and guards during setup and hands them to a
host when mounted. Nothing is global: every ``Router`` owns its own
registries, and the lifecycle is register-then-serve.

Basic usage::

    from expressway import Router, RestServer

    router = Router("shop/v1")

    def load_item(request, acc):
        return {"id": request.path_params["id"]}

    router.get("/items/:id", load_item)
    router.hook("GET", "/wp/v2/posts/:id", add_cache_header)

    server = RestServer()
    router.mount(server)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from expressway.config import RouterConfig
from expressway.middleware.protocol import Middleware
from expressway.routing.registry import Registry
from expressway.routing.route import Route

if TYPE_CHECKING:
    from expressway.host.server import RestServer


class Router:
    """Registers routes and middleware chains for a host to serve.

    Three kinds of registration:

    - ``route()`` and the per-verb helpers create net-new endpoints
      under the router's namespace.
    - ``hook()`` attaches middlewares to requests the host already
      routes; each middleware post-processes the host's response.
    - ``guard()`` runs a chain before the host dispatches; a terminal
      response from the chain answers the request instead.

    Hook and guard templates are full host paths (namespace included),
    since they may target routes this router did not create.
    """

    __slots__ = ("config", "guards", "hooks", "routes")

    def __init__(self, namespace: str | None = None, *, config: RouterConfig | None = None) -> None:
        if namespace:
            config = RouterConfig(namespace=namespace)
        self.config: RouterConfig = config or RouterConfig()
        self.routes = Registry()
        self.hooks = Registry()
        self.guards = Registry()

    @property
    def namespace(self) -> str:
        return self.config.namespace

    # -- Net-new endpoints --

    def route(self, method: str, endpoint: str, *middlewares: Middleware) -> Route:
        """Register a new endpoint for *method* in this router's namespace."""
        return self.routes.register(method, endpoint, middlewares)

    def get(self, endpoint: str, *middlewares: Middleware) -> Route:
        """Register a new GET endpoint."""
        return self.route("GET", endpoint, *middlewares)

    def post(self, endpoint: str, *middlewares: Middleware) -> Route:
        """Register a new POST endpoint."""
        return self.route("POST", endpoint, *middlewares)

    def put(self, endpoint: str, *middlewares: Middleware) -> Route:
        """Register a new PUT endpoint."""
        return self.route("PUT", endpoint, *middlewares)

    def patch(self, endpoint: str, *middlewares: Middleware) -> Route:
        """Register a new PATCH endpoint."""
        return self.route("PATCH", endpoint, *middlewares)

    def delete(self, endpoint: str, *middlewares: Middleware) -> Route:
        """Register a new DELETE endpoint."""
        return self.route("DELETE", endpoint, *middlewares)

    # -- Existing endpoints --

    def hook(self, method: str, endpoint: str, *middlewares: Middleware) -> Route:
        """Apply *middlewares* to an endpoint the host already serves.

        Each middleware is called as ``mw(request, response)`` after the
        host has produced its response, and returns the response to use.
        """
        return self.hooks.register(method, endpoint, middlewares)

    def guard(self, method: str, endpoint: str, *middlewares: Middleware) -> Route:
        """Run *middlewares* before the host dispatches *endpoint*.

        If the chain produces a terminal response, that response is sent
        and the endpoint itself never runs.
        """
        return self.guards.register(method, endpoint, middlewares)

    # -- Host wiring --

    def mount(self, server: RestServer) -> None:
        """Hand every registration to *server*. Call once, before serving."""
        from expressway.host.adapter import mount

        mount(self, server)

    def freeze(self) -> None:
        """End the setup phase for all three registries."""
        self.routes.freeze()
        self.hooks.freeze()
        self.guards.freeze()
