# audioprobe/domain/policies/metadata_normalizer.py
from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Optional

from audioprobe.common.probe.ffprobe_helpers import float_or_zero, int_or_zero
from audioprobe.common.result import Result
from audioprobe.domain.entities.audio_metadata import TAG_FIELDS, AudioMetadata
from audioprobe.domain.entities.probe import ProbeRawResult, StreamDescriptor
from audioprobe.domain.errors import ErrorCode

BYTES_PER_MB = 1024 * 1024

# Only these are ever taken from the container tags, and only when the stream has no title.
FORMAT_FALLBACK_TAGS: tuple[str, ...] = ("title", "artist", "album")


def kbps(bits_per_sec: int) -> int:
    """Whole kbps, remainder dropped (truncates toward zero, also for negative input)."""
    q = abs(bits_per_sec) // 1000
    return q if bits_per_sec >= 0 else -q


def first_audio_stream(raw: ProbeRawResult) -> Optional[StreamDescriptor]:
    return next((s for s in raw.streams if s.codec_type == "audio"), None)


def base_name(filename: str) -> str:
    """Last path segment of ffprobe's `format.filename`, whatever the separator."""
    if not filename:
        return ""
    return PurePath(filename.replace("\\", "/")).name


def resolve_tags(raw: ProbeRawResult, stream: StreamDescriptor) -> Dict[str, str]:
    """
    Stream tags are authoritative. Container tags only fill title/artist/album,
    and only when the stream gave no title; they overwrite all three together.
    """
    resolved: Dict[str, str] = {}
    if stream.tags is not None:
        resolved = {k: stream.tags.get(k, "") for k in TAG_FIELDS}

    fmt_tags = raw.format.tags
    if fmt_tags is not None and not resolved.get("title"):
        for k in FORMAT_FALLBACK_TAGS:
            resolved[k] = fmt_tags.get(k, "")

    return {k: v for k, v in resolved.items() if v}


def normalize_metadata(raw: ProbeRawResult) -> Result[AudioMetadata]:
    stream = first_audio_stream(raw)
    if stream is None:
        return Result.Err(ErrorCode.NO_AUDIO_STREAM, "No audio stream found in file.")

    fmt = raw.format
    return Result.Ok(
        AudioMetadata(
            file_name=base_name(fmt.filename),
            container_format=fmt.format_name,
            file_size_mb=float_or_zero(fmt.size) / BYTES_PER_MB,
            duration_sec=float_or_zero(fmt.duration),
            integrity_score=fmt.probe_score,
            codec=stream.codec_name,
            sample_rate_hz=int_or_zero(stream.sample_rate),
            bit_rate_kbps=kbps(int_or_zero(stream.bit_rate)),
            channel_layout=stream.channel_layout,
            **resolve_tags(raw, stream),
        )
    )
