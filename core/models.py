"""
Shared data models for the detection pipeline and its outbound report.
Lightweight and immutable: ServiceSpec -> ProbeOutcome -> ServiceStatus -> ScanReport.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from probers.base import HandshakeDriver


class ProbeOutcome(str, Enum):
    UNREACHABLE = "unreachable"
    PROTOCOL_MISMATCH = "protocol_mismatch"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    INDETERMINATE = "indeterminate"


def _check_implications(port_open: bool, protocol_matched: bool, auth_enforced: bool) -> None:
    if protocol_matched and not port_open:
        raise ValueError("protocol cannot match on a closed port")
    if auth_enforced and not protocol_matched:
        raise ValueError("auth cannot be assessed on an unconfirmed protocol")


class HandshakeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    protocol_matched: bool = False
    auth_enforced: bool = False

    @model_validator(mode="after")
    def _consistent(self) -> "HandshakeResult":
        _check_implications(True, self.protocol_matched, self.auth_enforced)
        return self

    @property
    def outcome(self) -> ProbeOutcome:
        if not self.protocol_matched:
            return ProbeOutcome.PROTOCOL_MISMATCH
        if self.auth_enforced:
            return ProbeOutcome.AUTHENTICATED
        return ProbeOutcome.UNAUTHENTICATED


class ServiceStatus(BaseModel):
    """
    Per-service classification. Serialized under the wire names
    port/protocol/secured; `error` only appears when the pipeline failed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    port_open: bool = Field(False, alias="port")
    protocol_matched: bool = Field(False, alias="protocol")
    auth_enforced: bool = Field(False, alias="secured")
    error: Optional[str] = None

    @model_validator(mode="after")
    def _consistent(self) -> "ServiceStatus":
        _check_implications(self.port_open, self.protocol_matched, self.auth_enforced)
        return self

    @classmethod
    def from_outcome(cls, outcome: ProbeOutcome, reason: Optional[str] = None) -> "ServiceStatus":
        if outcome is ProbeOutcome.PROTOCOL_MISMATCH:
            return cls(port_open=True)
        if outcome is ProbeOutcome.UNAUTHENTICATED:
            return cls(port_open=True, protocol_matched=True)
        if outcome is ProbeOutcome.AUTHENTICATED:
            return cls(port_open=True, protocol_matched=True, auth_enforced=True)
        if outcome is ProbeOutcome.INDETERMINATE:
            return cls(error=reason or "indeterminate")
        return cls()

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class ServiceSpec:
    name: str
    port: int
    driver: "HandshakeDriver"

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("service name is required")
        if not 0 < self.port < 65536:
            raise ValueError(f"port {self.port} out of range for {self.name}")


class ScanEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    service: str
    status: ServiceStatus


class ScanReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    entries: List[ScanEntry] = Field(default_factory=list)
    duration_ms: int = 0

    def status_of(self, service: str) -> Optional[ServiceStatus]:
        for entry in self.entries:
            if entry.service == service:
                return entry.status
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        return [{"service": e.service, "status": e.status.to_wire()} for e in self.entries]
