"""
TCP connect reachability check using a plain connect() with a hard timeout.
Every failure mode collapses to False, including hostnames the IDNA
codec rejects and out-of-range timeouts. The socket is always closed.
"""

import logging
import socket

log = logging.getLogger(__name__)


def tcp_probe(host: str, port: int, timeout: float = 1.0) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except (socket.timeout, OSError, ValueError) as exc:
        log.debug("tcp probe %s:%s failed: %s", host, port, exc)
        return False
