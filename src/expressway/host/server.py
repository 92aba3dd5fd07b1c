"""REST dispatch server.

A small REST dispatcher in the style of a CMS REST API: endpoints are
registered as regex routes under a namespace, and filter points let
outside code inspect or replace values at fixed stages of every request.
The router mounts onto it; it knows nothing about templates, matchers,
or middleware chains.

Mutable during setup (routes, filters, init actions, error handlers).
Frozen when the first request arrives or the ASGI lifespan starts.
"""

import logging
import re
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias

import anyio.to_thread

from expressway._internal.asgi import Receive, Scope, Send
from expressway.config import HostConfig
from expressway.errors import HTTPError, MethodNotAllowed, NotFound
from expressway.host.errors import ErrorHandler, handle_http_error, handle_internal_error
from expressway.host.negotiation import negotiate
from expressway.host.sender import send_response
from expressway.http.request import Request
from expressway.http.response import Response

logger = logging.getLogger("expressway.server")

Callback: TypeAlias = Callable[[Request], Any]
Filter: TypeAlias = Callable[[Any, "RestServer", Request], Any]

DEFAULT_PRIORITY = 10


class FilterPoint(StrEnum):
    """Stages of a request at which filters run.

    PRE_DISPATCH      before route lookup; value starts as ``None`` and a
                      non-``None`` result answers the request
    BEFORE_CALLBACKS  after route lookup, path params set; same contract
    POST_DISPATCH     after the response exists; value is the response
    """

    PRE_DISPATCH = "pre_dispatch"
    BEFORE_CALLBACKS = "before_callbacks"
    POST_DISPATCH = "post_dispatch"


@dataclass(frozen=True, slots=True)
class NativeRoute:
    """A route in the server's own dispatch table."""

    namespace: str
    path: str
    methods: frozenset[str]
    callback: Callback
    regex: re.Pattern[str] = field(repr=False, compare=False)


@dataclass(order=True, slots=True)
class _FilterEntry:
    priority: int
    seq: int
    callback: Filter = field(compare=False)


def full_route(namespace: str, route: str) -> str:
    """Join a namespace and a route the way the dispatch table stores them.

    Both sides are trimmed of slashes and joined with exactly one, so
    ``("api", "status")`` and ``("/api/", "/status")`` give ``/api/status``.
    """
    namespace = namespace.strip("/")
    route = route.strip("/")
    if not namespace:
        return f"/{route}"
    return f"/{namespace}/{route}"


class RestServer:
    """The REST dispatch server, an ASGI 3.0 application.

    Usage::

        server = RestServer()

        @server.on_init
        def register():
            server.register_rest_route("shop/v1", r"/items/(?P<id>\\d+)", ["GET"], get_item)

        server.add_filter(FilterPoint.POST_DISPATCH, add_header)

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread runs the init actions, even
        if several workers receive their first request at once.
    """

    __slots__ = (
        "_error_handlers",
        "_filter_seq",
        "_filters",
        "_freeze_lock",
        "_frozen",
        "_init_actions",
        "_routes",
        "config",
    )

    def __init__(self, config: HostConfig | None = None) -> None:
        self.config: HostConfig = config or HostConfig()
        self._routes: list[NativeRoute] = []
        self._filters: dict[FilterPoint, list[_FilterEntry]] = {point: [] for point in FilterPoint}
        self._filter_seq = 0
        self._init_actions: list[Callable[[], Any]] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Registration --

    def register_rest_route(
        self,
        namespace: str,
        route: str,
        methods: Iterable[str],
        callback: Callback,
    ) -> NativeRoute:
        """Add *route* (a regex; named groups become path params) under *namespace*."""
        self._check_not_frozen()
        path = full_route(namespace, route)
        native = NativeRoute(
            namespace=namespace.strip("/"),
            path=path,
            methods=frozenset(m.upper() for m in methods),
            callback=callback,
            regex=re.compile(path),
        )
        self._routes.append(native)
        logger.debug("native route %s %s", ", ".join(sorted(native.methods)), path)
        return native

    def on_init(self, func: Callable[[], Any]) -> Callable[[], Any]:
        """Register an action to run once, when the server freezes.

        Init actions are where routes get registered; they may call
        ``register_rest_route`` and ``add_filter``.
        """
        self._check_not_frozen()
        self._init_actions.append(func)
        return func

    def add_filter(
        self,
        point: FilterPoint,
        callback: Filter,
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Attach *callback* to a filter point.

        Filters run by ascending priority, then in the order added.
        Each is called as ``callback(value, server, request)`` and
        returns the value for the next one.
        """
        self._check_not_frozen()
        self._filter_seq += 1
        self._filters[FilterPoint(point)].append(_FilterEntry(priority, self._filter_seq, callback))

    def error(self, code_or_exception: int | type) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler for a status code or exception type."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Introspection --

    @property
    def routes(self) -> tuple[NativeRoute, ...]:
        """Native routes in registration order."""
        return tuple(self._routes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Dispatch --

    def apply_filters(self, point: FilterPoint, value: Any, request: Request) -> Any:
        """Run every filter at *point* over *value* and return the result."""
        for entry in sorted(self._filters[point]):
            value = entry.callback(value, self, request)
        return value

    def match(self, method: str, path: str) -> tuple[NativeRoute, dict[str, str]]:
        """Find the native route for *method* and *path*.

        Returns the route and its path params, in the order they appear.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        allowed: set[str] = set()
        for native in self._routes:
            found = native.regex.fullmatch(path)
            if found is None:
                continue
            if method.upper() in native.methods:
                params = {k: v for k, v in found.groupdict().items() if v is not None}
                return native, params
            allowed.update(native.methods)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound()

    def dispatch(self, request: Request) -> Response:
        """Serve one request synchronously, filters included.

        Errors raised anywhere in the pipeline, filters and callbacks
        alike, become error responses here.
        """
        self._ensure_frozen()
        try:
            result = self.apply_filters(FilterPoint.PRE_DISPATCH, None, request)
            if result is None:
                native, params = self.match(request.method, request.path)
                request = request.with_path_params(params)
                result = self.apply_filters(FilterPoint.BEFORE_CALLBACKS, None, request)
                if result is None:
                    result = native.callback(request)
            response = negotiate(result)
        except HTTPError as exc:
            response = handle_http_error(exc, request, self._error_handlers)
        except Exception as exc:
            response = handle_internal_error(exc, request, self._error_handlers, self.config.debug)

        try:
            return negotiate(self.apply_filters(FilterPoint.POST_DISPATCH, response, request))
        except HTTPError as exc:
            return handle_http_error(exc, request, self._error_handlers)
        except Exception as exc:
            return handle_internal_error(exc, request, self._error_handlers, self.config.debug)

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the server and serve it with the development server."""
        from expressway.host.dev import run_dev_server

        self._ensure_frozen()
        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly; HTTP requests are read in full, then
        dispatched in a worker thread since callbacks and middlewares
        are synchronous and may block.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        self._ensure_frozen()
        request = await Request.from_asgi(scope, receive)
        response = await anyio.to_thread.run_sync(self.dispatch, request)
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing before the first request."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Run init actions and lock the dispatch table.

        MUST only be called while holding _freeze_lock.
        """
        for action in self._init_actions:
            action()
        self._frozen = True
        logger.info(
            "serving %d route(s), %d filter(s)",
            len(self._routes),
            sum(len(entries) for entries in self._filters.values()),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the server after it has started serving requests. "
                "Register routes, filters, and error handlers before the first request."
            )
            raise RuntimeError(msg)
