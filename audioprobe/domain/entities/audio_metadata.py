# audioprobe/domain/entities/audio_metadata.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

TAG_FIELDS: tuple[str, ...] = (
    "title",
    "artist",
    "album",
    "genre",
    "year",
    "track",
    "composer",
    "comment",
    "copyright",
)


@dataclass(frozen=True)
class AudioMetadata:
    """
    Normalized, framework-free metadata for one audio file.
    Technical fields are always set (zero/empty when ffprobe gave nothing usable);
    tag fields are None when the file does not carry them.
    """
    # technical
    file_name: str = ""
    container_format: str = ""
    file_size_mb: float = 0.0
    duration_sec: float = 0.0
    integrity_score: int = 0
    codec: str = ""
    sample_rate_hz: int = 0
    bit_rate_kbps: int = 0
    channel_layout: str = ""

    # descriptive tags
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[str] = None
    track: Optional[str] = None
    composer: Optional[str] = None
    comment: Optional[str] = None
    copyright: Optional[str] = None
