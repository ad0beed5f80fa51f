"""
Scan coordinator: one detection pipeline per configured service, run
concurrently on a thread pool and joined back in configuration order.
Nothing is kept between scans.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

from core.authz_scope import ensure_scannable_target
from core.config import Settings, settings
from core.models import ProbeOutcome, ScanEntry, ScanReport, ServiceSpec, ServiceStatus
from pipeline import stages
from pipeline.services import default_services

log = logging.getLogger(__name__)


class Orchestrator:
    def __init__(
        self,
        services: Optional[Iterable[ServiceSpec]] = None,
        probe_timeout_s: Optional[float] = None,
        max_workers: Optional[int] = None,
        cfg: Optional[Settings] = None,
    ) -> None:
        self.cfg = cfg or settings
        self.services: List[ServiceSpec] = list(services) if services is not None else default_services(self.cfg)
        self.probe_timeout_s = probe_timeout_s or self.cfg.probe_timeout_s
        self.max_workers = max_workers or self.cfg.scan_workers or len(self.services) or 1

    def _run_service(self, host: str, spec: ServiceSpec) -> ServiceStatus:
        try:
            return stages.detect_service(host, spec, probe_timeout=self.probe_timeout_s)
        except Exception as exc:  # noqa: BLE001
            log.exception("pipeline failed | service=%s host=%s", spec.name, host)
            return ServiceStatus.from_outcome(
                ProbeOutcome.INDETERMINATE, reason=f"{type(exc).__name__}: {exc}"
            )

    def scan(self, host: Optional[str]) -> ScanReport:
        target = ensure_scannable_target(host, self.cfg)
        start = time.time()

        entries: List[ScanEntry] = []
        if self.services:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(self._run_service, target, spec) for spec in self.services]
                # join in submission order, not completion order
                for spec, future in zip(self.services, futures):
                    entries.append(ScanEntry(service=spec.name, status=future.result()))

        report = ScanReport(host=target, entries=entries, duration_ms=int((time.time() - start) * 1000))
        log.info(
            "scan %s done in %d ms | %s",
            target,
            report.duration_ms,
            ", ".join(f"{e.service}={e.status.to_wire()}" for e in entries),
        )
        return report

    def describe(self) -> Dict[str, Any]:
        return {
            "probe_timeout_s": self.probe_timeout_s,
            "services": [
                {"service": s.name, "port": s.port, "driver": s.driver.name} for s in self.services
            ],
        }


def run_single(host: str) -> List[dict]:
    orch = Orchestrator()
    return orch.scan(host).to_list()
