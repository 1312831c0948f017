# audioprobe/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from audioprobe.common.logging import get_logger
from audioprobe.common.probe.ffprobe_helpers import build_ffprobe_cmd, format_cmd
from audioprobe.common.result import Result
from audioprobe.common.settings import FFProbeConfig
from audioprobe.domain.entities.probe import ProbeRawResult
from audioprobe.domain.errors import ErrorCode
from audioprobe.domain.ports.probe import MediaProbePort

logger = get_logger()


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Blocking; callers are expected to hold an admission gate slot around probe().
    Never raises for probe failures, they come back as Result.Err.
    """

    def __init__(self, cfg: Optional[FFProbeConfig] = None):
        cfg = cfg or FFProbeConfig()
        self.ffprobe_bin = cfg.bin
        self.log_level = cfg.log_level
        self.timeout_sec = cfg.timeout_sec

    def _resolve_bin(self) -> Optional[str]:
        # looked up per call so installing ffmpeg does not need a restart
        return shutil.which(self.ffprobe_bin)

    # ---- Port API -------------------------------------------------------------
    def is_available(self) -> bool:
        return self._resolve_bin() is not None

    def probe(self, path: Path) -> Result[ProbeRawResult]:
        resolved = self._resolve_bin()
        if not resolved:
            return Result.Err(
                ErrorCode.TOOL_NOT_FOUND,
                f"{self.ffprobe_bin} not found; install FFmpeg or set FFPROBE__BIN to the ffprobe binary.",
            )

        cmd = build_ffprobe_cmd(path, ffprobe_bin=resolved, log_level=self.log_level)
        logger.debug("ffprobe cmd: %s", format_cmd(cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout_sec,
                check=False,  # we handle rc manually to attach stderr
            )
        except subprocess.TimeoutExpired as e:
            logger.warning("ffprobe timed out after %ss for %s", self.timeout_sec, path)
            return Result.Err(ErrorCode.INVOCATION_FAILED, f"Failed to run ffprobe: timed out after {self.timeout_sec}s", stderr=str(e))
        except OSError as e:
            logger.warning("ffprobe could not be started for %s: %s", path, e)
            return Result.Err(ErrorCode.INVOCATION_FAILED, f"Failed to run ffprobe: {e}", stderr=str(e))

        stderr = proc.stderr.decode("utf-8", errors="replace").strip() if proc.stderr else ""
        if proc.returncode != 0:
            logger.warning("ffprobe exited with %s for %s: %s", proc.returncode, path, stderr)
            detail = f"exit status {proc.returncode}"
            if stderr:
                detail = f"{detail}: {stderr}"
            return Result.Err(
                ErrorCode.INVOCATION_FAILED,
                f"Failed to run ffprobe: {detail}",
                stderr=stderr or None,
                rc=proc.returncode,
            )

        stdout = (proc.stdout or b"").decode("utf-8", errors="replace")
        try:
            data = json.loads(stdout)
            raw = ProbeRawResult.from_dict(data)
        except ValueError as e:  # JSONDecodeError is a ValueError
            logger.warning("ffprobe produced unusable JSON for %s: %s", path, e)
            return Result.Err(ErrorCode.MALFORMED_OUTPUT, f"Failed to parse ffprobe JSON output: {e}")

        return Result.Ok(raw)
