# audioprobe/services/schemas/analyze.py
from __future__ import annotations
from typing import Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AudioMetadataRead(BaseModel):
    # --- technical, always present ---
    file_name: str = Field(..., examples=["song.mp3"])
    container_format: str = Field(..., examples=["mp3"])
    file_size_mb: float
    duration_sec: float
    integrity_score_100: int = Field(
        ...,
        validation_alias=AliasChoices("integrity_score", "integrity_score_100"),
        description="ffprobe's probe_score (0..100): how sure it is about the container format",
    )
    codec: str = Field(..., examples=["mp3"])
    sample_rate_hz: int = Field(..., examples=[44100])
    bit_rate_kbps: int = Field(..., examples=[320])
    channel_layout: str = Field(..., examples=["stereo"])

    # --- tags, omitted from the JSON when missing ---
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[str] = None
    track: Optional[str] = None
    composer: Optional[str] = None
    comment: Optional[str] = None
    copyright: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SuccessEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: AudioMetadataRead


class ErrorEnvelope(BaseModel):
    status: Literal["error"] = "error"
    message: str
