# audioprobe/services/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from audioprobe.common.concurrency.admission_gate import AdmissionGate
from audioprobe.common.settings import Settings
from audioprobe.domain.ports.probe import MediaProbePort
from audioprobe.services.api.deps import get_admission_gate, get_app_settings, get_media_probe

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(
    s: Settings = Depends(get_app_settings),
    gate: AdmissionGate = Depends(get_admission_gate),
    probe: MediaProbePort = Depends(get_media_probe),
):
    stats = gate.stats()
    return {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
        "ffprobe_available": probe.is_available(),
        "gate": {
            "capacity": stats.capacity,
            "in_flight": stats.in_flight,
            "peak_in_flight": stats.peak_in_flight,
        },
    }
