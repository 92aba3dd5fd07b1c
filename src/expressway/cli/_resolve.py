"""Import resolution — resolves ``"module:attribute"`` strings.

Shared by ``expressway routes`` and ``expressway run`` to locate a
Router or RestServer from a user-supplied import string.
"""

import importlib

from expressway.host.server import RestServer
from expressway.router import Router


def resolve_target(import_string: str) -> Router | RestServer:
    """Resolve an import string to a Router or RestServer instance.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"router"``.

    Factory functions are supported: a callable that is neither a
    Router nor a RestServer is called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is neither a Router nor a RestServer.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (Router, RestServer)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, (Router, RestServer)):
        msg = (
            f"{import_string!r} resolved to {type(obj).__name__}, "
            "not an expressway Router or RestServer"
        )
        raise TypeError(msg)

    return obj
