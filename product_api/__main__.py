"""
Process entry point: `python -m product_api`.

Runs uvicorn on the configured port. When that port is already bound and
FALLBACK_PORT is not `none`, the fallback port is used instead.
"""

import errno
import logging
import socket
from typing import Optional

import uvicorn

from product_api.config import settings
from product_api.main import setup_logging

logger = logging.getLogger("product_api")


def port_available(host: str, port: int) -> bool:
    """True if a TCP socket can be bound to (host, port) right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                return False
            raise
    return True


def choose_port(host: str, port: int, fallback_port: Optional[int]) -> int:
    """
    The preferred port if it is free, else the fallback port.

    Raises:
        OSError: Both ports are taken (or the fallback is disabled)
    """
    if port_available(host, port):
        return port
    if fallback_port is None:
        raise OSError(errno.EADDRINUSE, f"Port {port} is busy and no fallback port is configured")
    logger.warning("Port %d is busy, trying %d...", port, fallback_port)
    if not port_available(host, fallback_port):
        raise OSError(errno.EADDRINUSE, f"Ports {port} and {fallback_port} are both busy")
    return fallback_port


def main() -> None:
    setup_logging(settings.log_level)
    port = choose_port(settings.host, settings.port, settings.fallback_port)
    logger.info("Server running on http://%s:%d (docs at /docs)", settings.host, port)
    uvicorn.run(
        "product_api.main:app",
        host=settings.host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
