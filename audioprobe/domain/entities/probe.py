# audioprobe/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


def _text(x: Any) -> str:
    return "" if x is None else str(x)


def _int_or_zero(x: Any) -> int:
    try:
        return int(float(x))
    except (TypeError, ValueError, OverflowError):
        return 0


def _tags(x: Any) -> Optional[Dict[str, str]]:
    """
    Copy an ffprobe tag map. Keys are lower-cased (ID3 gives "title",
    Vorbis comments often "TITLE"); values are stringified.
    """
    if not isinstance(x, Mapping):
        return None
    return {str(k).lower(): _text(v) for k, v in x.items()}


@dataclass(frozen=True)
class StreamDescriptor:
    """
    One entry of ffprobe's `streams` list, as loosely typed as ffprobe emits it.
    Numeric fields stay text here; the normalizer parses them.
    """
    codec_name: str = ""
    codec_type: str = ""
    sample_rate: str = ""
    bit_rate: str = ""
    channels: int = 0
    channel_layout: str = ""
    tags: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "StreamDescriptor":
        return cls(
            codec_name=_text(d.get("codec_name")),
            codec_type=_text(d.get("codec_type")),
            sample_rate=_text(d.get("sample_rate")),
            bit_rate=_text(d.get("bit_rate")),
            channels=_int_or_zero(d.get("channels")),
            channel_layout=_text(d.get("channel_layout")),
            tags=_tags(d.get("tags")),
        )


@dataclass(frozen=True)
class ProbeFormat:
    filename: str = ""
    format_name: str = ""
    size: str = ""
    duration: str = ""
    probe_score: int = 0
    tags: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ProbeFormat":
        return cls(
            filename=_text(d.get("filename")),
            format_name=_text(d.get("format_name")),
            size=_text(d.get("size")),
            duration=_text(d.get("duration")),
            probe_score=_int_or_zero(d.get("probe_score")),
            tags=_tags(d.get("tags")),
        )


@dataclass(frozen=True)
class ProbeRawResult:
    """
    The `-show_format -show_streams` document, container section plus streams
    in the order ffprobe listed them. Lives for one request.
    """
    format: ProbeFormat = field(default_factory=ProbeFormat)
    streams: Tuple[StreamDescriptor, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ProbeRawResult":
        """
        Raises ValueError when the document does not have the expected shape
        (not an object, `format` not an object, `streams` not a list).
        Missing sections are fine and come back empty.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        fmt = data.get("format")
        if fmt is None:
            fmt = {}
        if not isinstance(fmt, Mapping):
            raise ValueError(f"'format' must be an object, got {type(fmt).__name__}")

        streams = data.get("streams")
        if streams is None:
            streams = []
        if not isinstance(streams, list):
            raise ValueError(f"'streams' must be a list, got {type(streams).__name__}")
        for i, s in enumerate(streams):
            if not isinstance(s, Mapping):
                raise ValueError(f"stream #{i} must be an object, got {type(s).__name__}")

        return cls(
            format=ProbeFormat.from_dict(fmt),
            streams=tuple(StreamDescriptor.from_dict(s) for s in streams),
        )
