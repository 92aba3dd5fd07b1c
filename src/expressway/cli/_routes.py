"""``expressway routes`` — list registered routes.

For a Router: every route, hook, and guard with its middleware chain.
For a RestServer: the native dispatch table after init actions ran.
"""

import argparse
import sys

from expressway.cli._resolve import resolve_target
from expressway.host.server import RestServer
from expressway.router import Router
from expressway.routing.template import compile_template


def _callable_name(obj: object) -> str:
    return getattr(obj, "__name__", type(obj).__name__)


def router_rows(router: Router) -> list[tuple[str, str, str, str]]:
    """Rows of (METHOD, PATH, KIND, MIDDLEWARE) for a router."""
    rows: list[tuple[str, str, str, str]] = []
    prefix = compile_template(router.namespace)
    for kind, registry in (("route", router.routes), ("guard", router.guards), ("hook", router.hooks)):
        for route in registry:
            path = route.path
            if kind == "route" and prefix.segments:
                path = "/" + "/".join(s.value for s in prefix.segments) + path
            chain = " -> ".join(_callable_name(mw) for mw in route.middlewares) or "-"
            rows.append((route.method, path, kind, chain))
    return rows


def server_rows(server: RestServer) -> list[tuple[str, str, str, str]]:
    """Rows of (METHOD, PATH, KIND, MIDDLEWARE) for a server's native routes."""
    server._ensure_frozen()
    return [
        (", ".join(sorted(native.methods)), native.path, "native", _callable_name(native.callback))
        for native in server.routes
    ]


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, KIND, and MIDDLEWARE."""
    try:
        target = resolve_target(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = router_rows(target) if isinstance(target, Router) else server_rows(target)
    if not rows:
        print("No routes registered.")
        return

    headers = ("METHOD", "PATH", "KIND", "MIDDLEWARE")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(row[3]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
