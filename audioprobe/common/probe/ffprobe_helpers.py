# audioprobe/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import Any, List
import math
import shlex


def build_ffprobe_cmd(input_path: str | Path, *, ffprobe_bin: str = "ffprobe", log_level: str = "quiet") -> List[str]:
    """
    Build an ffprobe command that emits container + stream info as JSON.
    The path is always the last argument and is never shell-interpreted.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    return [
        ffprobe_bin,
        "-v", log_level,
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        "--",  # Stop option parsing in case of weird filenames
        input_path,
    ]


def format_cmd(cmd: List[str]) -> str:
    return " ".join(shlex.quote(p) for p in cmd)


# ---- fail-open numeric parsing -----------------------------------------------
def float_or_zero(x: Any) -> float:
    """ffprobe numbers arrive as text; anything unusable (incl. nan/inf) is 0.0."""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return 0.0
    return v if math.isfinite(v) else 0.0


def int_or_zero(x: Any) -> int:
    """Whole-number text only ("44100"); "44100.5", "N/A" or "" give 0."""
    try:
        return int(str(x).strip())
    except (TypeError, ValueError):
        return 0
