"""Dev-server port allocation.

The preferred port is tried first, then the following ones. The result is
resolved once per process so every generated dev-server client URL agrees.
"""

from __future__ import annotations

import contextlib
import socket
from functools import lru_cache

from variant_builder.errors import ConfigurationError, ResourceExhaustedError
from variant_builder.logging import get_logger

log = get_logger("variant_builder.ports")

DEFAULT_PORT = 9009
MAX_ATTEMPTS = 20
MAX_PORT = 65535


def _try_bind(host: str, port: int) -> int | None:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        try:
            s.bind((host, port))
        except OSError:
            return None
        return s.getsockname()[1]


def allocate_port(preferred: int, host: str = "0.0.0.0", attempts: int = MAX_ATTEMPTS) -> int:
    """Return *preferred* if it can be bound, else the next free port after it.

    ``preferred=0`` asks the OS for an ephemeral port. Raises
    ResourceExhaustedError when *attempts* consecutive ports are taken and
    ConfigurationError for a port outside 0..65535.
    """
    if not 0 <= preferred <= MAX_PORT:
        raise ConfigurationError(f"Port out of range: {preferred}")
    if preferred == 0:
        got = _try_bind(host, 0)
        if got is None:
            raise ResourceExhaustedError("OS refused to assign an ephemeral port")
        return got

    for port in range(preferred, min(preferred + attempts, MAX_PORT + 1)):
        got = _try_bind(host, port)
        if got is not None:
            if port != preferred:
                log.warning("port %d busy, falling back to %d", preferred, port)
            return got
    raise ResourceExhaustedError(
        f"No free port in {preferred}..{min(preferred + attempts, MAX_PORT + 1) - 1}"
    )


@lru_cache(maxsize=None)
def resolved_port(preferred: int = DEFAULT_PORT) -> int:
    """Process-wide port; computed on first use and never re-resolved."""
    port = allocate_port(preferred)
    log.info("dev server port resolved to %d", port)
    return port
