"""Host adapter — wires a Router into a RestServer.

Net-new routes become native routes, registered from an init action so
they land in the dispatch table when the server freezes. Hooks and
guards cannot rely on the server's route identity: they sit on filter
points that fire for every request, so each one re-checks
applicability with the structural matcher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from expressway.host.server import FilterPoint, RestServer
from expressway.http.request import Request
from expressway.middleware.executor import execute, resolve
from expressway.middleware.protocol import Final, Middleware
from expressway.routing.matcher import matches
from expressway.routing.route import Route

if TYPE_CHECKING:
    from expressway.host.server import Callback, Filter
    from expressway.router import Router

logger = logging.getLogger("expressway.server")


def callback_for(route: Route) -> Callback:
    """Native callback that runs *route*'s middleware chain."""
    middlewares = route.middlewares

    def callback(request: Request) -> Any:
        return execute(middlewares, request)

    callback.__name__ = f"chain[{route}]"
    return callback


def hook_filter(route: Route, middleware: Middleware) -> Filter:
    """Post-dispatch filter applying one hook middleware to matching requests."""

    def apply(response: Any, server: RestServer, request: Request) -> Any:
        if not matches(route, request):
            return response
        return middleware(request, response)

    return apply


def guard_filter(route: Route) -> Filter:
    """Before-callbacks filter that answers the request when the chain ends early."""
    middlewares = route.middlewares

    def apply(result: Any, server: RestServer, request: Request) -> Any:
        if result is not None or not matches(route, request):
            return result
        step = resolve(middlewares, request)
        match step:
            case Final(response=response):
                logger.debug("guard %s answered %s %s", route, request.method, request.path)
                return response
            case _:
                return None

    return apply


def mount(router: Router, server: RestServer) -> None:
    """Register everything *router* holds with *server*.

    Raises ``RuntimeError`` if the server is already serving.
    """
    if server.frozen:
        msg = "Cannot mount a router on a server that is already serving requests."
        raise RuntimeError(msg)

    router.freeze()

    @server.on_init
    def register_routes() -> None:
        for route in router.routes:
            server.register_rest_route(
                router.namespace,
                route.template.host_pattern,
                [route.method],
                callback_for(route),
            )

    for route in router.guards:
        server.add_filter(FilterPoint.BEFORE_CALLBACKS, guard_filter(route))

    for route in router.hooks:
        for middleware in route.middlewares:
            server.add_filter(FilterPoint.POST_DISPATCH, hook_filter(route, middleware))

    logger.debug(
        "mounted router %r: %d route(s), %d hook(s), %d guard(s)",
        router.namespace,
        len(router.routes),
        len(router.hooks),
        len(router.guards),
    )
