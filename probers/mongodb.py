"""
MongoDB handshake driver.

Two stages:
    1. Session: connect without credentials and run `ping`, which MongoDB
       answers even when auth is enabled. If no session can be established
       the port is held by something that does not speak the wire protocol.
    2. Command: attempt a privileged operation. By default this inserts a
       marker document into <database>.<notice_collection> so the operator
       of an unsecured server finds evidence of the exposure. With notices
       disabled a `listCollections` is issued instead, which is read-only but
       still rejected by servers that enforce auth.

Any failure in stage 2 is read as auth enforcement.
"""

from __future__ import annotations

import datetime as dt
import logging

from pymongo import MongoClient
from pymongo.errors import OperationFailure, PyMongoError

from core.models import HandshakeResult
from probers.base import HandshakeDriver

log = logging.getLogger(__name__)


class MongoDBDriver(HandshakeDriver):
    def __init__(
        self,
        timeout_s: float = 1.0,
        database: str = "local",
        notice_enabled: bool = True,
        notice_collection: str = "secureit",
        notice_message: str = "This server was not secured.",
    ) -> None:
        self.timeout_s = timeout_s
        self.database = database
        self.notice_enabled = notice_enabled
        self.notice_collection = notice_collection
        self.notice_message = notice_message

    @property
    def name(self) -> str:
        return "mongodb"

    def _client(self, host: str, port: int) -> MongoClient:
        timeout_ms = int(self.timeout_s * 1000)
        return MongoClient(
            host=host,
            port=port,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
            directConnection=True,
        )

    def _command_stage(self, client: MongoClient) -> None:
        db = client[self.database]
        if self.notice_enabled:
            db[self.notice_collection].insert_one(
                {"msg": self.notice_message, "createdAt": dt.datetime.now(dt.timezone.utc)}
            )
        else:
            db.list_collection_names()

    def handshake(self, host: str, port: int) -> HandshakeResult:
        try:
            client = self._client(host, port)
        except PyMongoError as exc:
            log.debug("mongodb %s:%s client setup failed: %s", host, port, exc)
            return HandshakeResult()

        with client:
            try:
                client.admin.command("ping")
            except OperationFailure as exc:
                # server answered in-protocol but refused even ping
                log.debug("mongodb %s:%s ping refused: %s", host, port, exc)
                return HandshakeResult(protocol_matched=True, auth_enforced=True)
            except PyMongoError as exc:
                log.debug("mongodb %s:%s no session: %s", host, port, exc)
                return HandshakeResult()

            try:
                self._command_stage(client)
            except Exception as exc:  # noqa: BLE001
                log.debug("mongodb %s:%s command rejected: %s", host, port, exc)
                return HandshakeResult(protocol_matched=True, auth_enforced=True)

        if self.notice_enabled:
            log.info(
                "mongodb %s:%s accepted unauthenticated write to %s.%s",
                host, port, self.database, self.notice_collection,
            )
        return HandshakeResult(protocol_matched=True)

    def __repr__(self) -> str:
        return f"MongoDBDriver(timeout_s={self.timeout_s}, notice_enabled={self.notice_enabled})"
