"""
FastAPI surface exposing the service auth scan.
Bad targets are rejected with 400 before any probe is sent.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from core.errors import ScanInputError
from pipeline.orchestrator import Orchestrator

log = logging.getLogger(__name__)

app = FastAPI(title="Service Auth Probe API", version="1.0")
orch = Orchestrator()


class TargetPayload(BaseModel):
    host: Optional[str] = None


def _scan(host: Optional[str]):
    try:
        return orch.scan(host).to_list()
    except ScanInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        log.exception("scan failed")
        raise HTTPException(status_code=500, detail="scan failed") from exc


@app.get("/api/scan")
def api_scan_query(host: Optional[str] = Query(None)):
    return _scan(host)


@app.post("/api/scan")
def api_scan(payload: TargetPayload):
    return _scan(payload.host)


@app.get("/api/services")
def api_services():
    return orch.describe()


@app.get("/api/health")
def api_health():
    return {"status": "ok", "services": len(orch.services)}
