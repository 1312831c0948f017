from __future__ import annotations
from pathlib import Path
from typing import Protocol
from audioprobe.common.result import Result
from audioprobe.domain.entities.probe import ProbeRawResult

class MediaProbePort(Protocol):
    def probe(self, path: Path) -> Result[ProbeRawResult]: ...
    def is_available(self) -> bool: ...
