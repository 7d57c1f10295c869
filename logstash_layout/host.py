"""Host name lookup, resolved once per process."""

import functools
import logging
import socket

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def resolve_hostname() -> str:
    """Return the local host name, or the error text if it cannot be resolved."""
    try:
        return socket.gethostname()
    except OSError as e:
        logger.warning("Host name lookup failed: %s", e)
        return str(e)
