"""Host — a small ASGI REST dispatcher the router mounts onto.

The routing core never talks to ASGI. This package owns the native
route table, the filter points, error handling, and response emission,
and ``adapter`` wires a ``Router`` into it.
"""

from expressway.host.server import FilterPoint, NativeRoute, RestServer

__all__ = ["FilterPoint", "NativeRoute", "RestServer"]
