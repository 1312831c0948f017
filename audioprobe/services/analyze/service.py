# audioprobe/services/analyze/service.py
from __future__ import annotations

from pathlib import Path

from audioprobe.common.concurrency.admission_gate import AdmissionGate
from audioprobe.common.logging import get_logger
from audioprobe.common.path.safe import path_exists
from audioprobe.common.result import Result
from audioprobe.domain.entities.audio_metadata import AudioMetadata
from audioprobe.domain.errors import ErrorCode
from audioprobe.domain.policies.metadata_normalizer import normalize_metadata
from audioprobe.domain.ports.probe import MediaProbePort

logger = get_logger()


class AnalyzeService:
    """
    Admitted part of one analyze request: take a gate slot, check the file,
    probe it, normalize the output. Whatever happens, the slot is handed back
    before analyze() returns and the failure comes back as a Result.
    """

    def __init__(self, *, gate: AdmissionGate, probe: MediaProbePort) -> None:
        self.gate = gate
        self.probe = probe

    def analyze(self, file_path: str) -> Result[AudioMetadata]:
        with self.gate.slot():
            # The file can still vanish before ffprobe opens it; that shows up as a probe failure.
            if not path_exists(file_path):
                return Result.Err(ErrorCode.NOT_FOUND, f"File not found on server path: {file_path}")

            try:
                return self.probe.probe(Path(file_path)).and_then(normalize_metadata)
            except Exception as e:
                logger.exception("Unexpected failure analyzing %s", file_path)
                return Result.Err(ErrorCode.INTERNAL, f"Internal error while analyzing file: {e}")
