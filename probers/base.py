"""
Handshake driver contract.

A driver performs the smallest protocol-level exchange that tells us whether
the expected service is speaking on a port and whether it demands
credentials. The pipeline only calls a driver after the port accepted a TCP
connection, so drivers never need to handle the closed-port case.

Drivers must:
    - never raise for network or protocol failures; map them to a
      HandshakeResult following their documented classification
    - bound every round-trip by their configured timeout
    - close every session they open, on every exit path
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.models import HandshakeResult


class HandshakeDriver(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        """Short protocol identifier, e.g. "mongodb"."""
        ...

    @abstractmethod
    def handshake(self, host: str, port: int) -> HandshakeResult:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
