"""
Per-service detection, two sequential stages:
Stage-1: TCP reachability
Stage-2: protocol handshake via the service's driver (only if Stage-1 passed)
"""

import logging
import time

from core.models import ProbeOutcome, ServiceSpec, ServiceStatus
from probers import l4_tcp

log = logging.getLogger(__name__)


def detect_outcome(host: str, spec: ServiceSpec, probe_timeout: float = 1.0) -> ProbeOutcome:
    if not l4_tcp.tcp_probe(host, spec.port, timeout=probe_timeout):
        return ProbeOutcome.UNREACHABLE
    return spec.driver.handshake(host, spec.port).outcome


def detect_service(host: str, spec: ServiceSpec, probe_timeout: float = 1.0) -> ServiceStatus:
    start = time.time()
    outcome = detect_outcome(host, spec, probe_timeout)
    log.debug(
        "%s on %s:%s -> %s (%d ms)",
        spec.name, host, spec.port, outcome.value, int((time.time() - start) * 1000),
    )
    return ServiceStatus.from_outcome(outcome)
