"""``expressway run`` — development server command."""

import argparse
import logging
import sys

from expressway.cli._resolve import resolve_target
from expressway.host.server import RestServer
from expressway.router import Router


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.target`` and serve it.

    A Router is mounted onto a fresh RestServer with default config.
    """
    from expressway.host import dev

    try:
        target = resolve_target(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # Reload reimports the target, which only works when it is the server itself.
    app_path: str | None = None
    if isinstance(target, Router):
        server = RestServer()
        target.mount(server)
    else:
        server = target
        app_path = args.target

    logging.basicConfig(
        level=server.config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    dev.run_dev_server(
        server,
        args.host or server.config.host,
        args.port or server.config.port,
        reload=server.config.debug,
        app_path=app_path,
    )
