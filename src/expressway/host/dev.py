"""Development server.

Starts a pounce ASGI server with the live RestServer object.
Requires the ``server`` extra (``pip install expressway[server]``).
"""

from expressway.errors import ConfigurationError


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server with the given ASGI app.

    Args:
        app: ASGI callable (a RestServer instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "Serving requires the pounce ASGI server. "
            "Install it with: pip install expressway[server]"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app, app_path=app_path)
    server.run()
