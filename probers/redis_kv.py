"""
Redis handshake driver.

Redis authenticates at connection setup: a PING on a fresh, credential-less
connection is answered only when no password is configured.

Known limitation: every connection-level error (refused, NOAUTH, protocol
garbage, timeout) is classified as protocol matched + auth enforced. A port
held by some other service that rejects our handshake is therefore reported
as a secured Redis. Telling those apart needs a reply parser for the RESP
banner and would change what callers see for non-Redis listeners.
"""

from __future__ import annotations

import logging

import redis
from redis.backoff import NoBackoff
from redis.exceptions import RedisError
from redis.retry import Retry

from core.models import HandshakeResult
from probers.base import HandshakeDriver

log = logging.getLogger(__name__)


class RedisDriver(HandshakeDriver):
    def __init__(self, timeout_s: float = 1.0) -> None:
        self.timeout_s = timeout_s

    @property
    def name(self) -> str:
        return "redis"

    def _client(self, host: str, port: int) -> redis.Redis:
        return redis.Redis(
            host=host,
            port=port,
            socket_connect_timeout=self.timeout_s,
            socket_timeout=self.timeout_s,
            retry=Retry(NoBackoff(), 0),
        )

    @staticmethod
    def _quit(client: redis.Redis, host: str, port: int) -> None:
        try:
            client.execute_command("QUIT")
        except RedisError as exc:
            log.debug("redis %s:%s QUIT not acknowledged: %s", host, port, exc)

    def handshake(self, host: str, port: int) -> HandshakeResult:
        with self._client(host, port) as client:
            try:
                client.ping()
            except Exception as exc:  # noqa: BLE001
                log.debug("redis %s:%s handshake rejected: %s", host, port, exc)
                return HandshakeResult(protocol_matched=True, auth_enforced=True)
            self._quit(client, host, port)
        return HandshakeResult(protocol_matched=True)

    def __repr__(self) -> str:
        return f"RedisDriver(timeout_s={self.timeout_s})"
