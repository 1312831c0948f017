# audioprobe/services/api/deps.py
from __future__ import annotations
from fastapi import Depends, Request

from audioprobe.common.concurrency.admission_gate import AdmissionGate
from audioprobe.common.settings import Settings
from audioprobe.domain.ports.probe import MediaProbePort
from audioprobe.services.analyze.service import AnalyzeService
from audioprobe.services.probe.ffprobe_adapter import FFprobeAdapter


def get_app_settings(request: Request) -> Settings:
    """The Settings instance create_app() was built with."""
    return request.app.state.settings


def get_admission_gate(request: Request) -> AdmissionGate:
    """The one process-wide gate; never build a gate per request."""
    return request.app.state.admission_gate


def get_media_probe(settings: Settings = Depends(get_app_settings)) -> MediaProbePort:
    """
    Provide a MediaProbePort implementation (ffprobe) via DI.
    Tests override this with in-process fakes.
    """
    return FFprobeAdapter(settings.ffprobe)


def get_analyze_service(
    gate: AdmissionGate = Depends(get_admission_gate),
    probe: MediaProbePort = Depends(get_media_probe),
) -> AnalyzeService:
    return AnalyzeService(gate=gate, probe=probe)
