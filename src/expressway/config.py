"""Router and host configuration.

Both are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

DEFAULT_NAMESPACE = "api"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Configuration for a :class:`~expressway.router.Router`.

    The namespace is the prefix under which net-new endpoints are
    registered with the host (``/api/items/7`` for ``"api"``)::

        config = RouterConfig(namespace="shop/v1")
    """

    namespace: str = DEFAULT_NAMESPACE


@dataclass(frozen=True, slots=True)
class HostConfig:
    """Configuration for the bundled ASGI host. Immutable after creation."""

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Logging (applied by ``expressway run``; the library installs no handlers)
    log_level: str = "info"
