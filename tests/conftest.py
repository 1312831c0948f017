# tests/conftest.py
from __future__ import annotations
import copy
import threading
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from starlette.testclient import TestClient

from audioprobe.common.result import Result
from audioprobe.common.settings import ConcurrencyConfig, Settings
from audioprobe.domain.entities.probe import ProbeRawResult
from audioprobe.services.api.app import create_app
from audioprobe.services.api.deps import get_media_probe

# Trimmed `ffprobe -show_format -show_streams` output of an MP3 with cover art.
FFPROBE_MP3: Dict[str, Any] = {
    "streams": [
        {
            "index": 0,
            "codec_name": "mp3",
            "codec_type": "audio",
            "sample_rate": "44100",
            "channels": 2,
            "channel_layout": "stereo",
            "bit_rate": "320000",
            "tags": {"encoder": "LAME3.100"},
        },
        {
            "index": 1,
            "codec_name": "mjpeg",
            "codec_type": "video",
            "tags": {"comment": "Cover (front)"},
        },
    ],
    "format": {
        "filename": "/srv/music/Artist - Song.mp3",
        "nb_streams": 2,
        "format_name": "mp3",
        "duration": "215.484082",
        "size": "8650752",
        "bit_rate": "321148",
        "probe_score": 51,
        "tags": {
            "title": "Song",
            "artist": "Artist",
            "album": "Album",
            "genre": "Rock",
            "date": "2004",
        },
    },
}


@pytest.fixture()
def ffprobe_mp3() -> Dict[str, Any]:
    return copy.deepcopy(FFPROBE_MP3)


class FakeProbe:
    """
    In-process stand-in for FFprobeAdapter. Returns `result` (or raises `error`),
    optionally after `delay` seconds, and records how many probes overlapped.
    """

    def __init__(
        self,
        payload: Optional[Dict[str, Any]] = None,
        *,
        result: Optional[Result[ProbeRawResult]] = None,
        error: Optional[BaseException] = None,
        delay: float = 0.0,
        on_probe: Optional[Callable[[Path], None]] = None,
    ) -> None:
        self.payload = payload if payload is not None else copy.deepcopy(FFPROBE_MP3)
        self.result = result
        self.error = error
        self.delay = delay
        self.on_probe = on_probe
        self.calls: List[Path] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def is_available(self) -> bool:
        return True

    def probe(self, path: Path) -> Result[ProbeRawResult]:
        with self._lock:
            self.calls.append(path)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.on_probe:
                self.on_probe(path)
            if self.delay:
                time.sleep(self.delay)
            if self.error is not None:
                raise self.error
            if self.result is not None:
                return self.result
            return Result.Ok(ProbeRawResult.from_dict(self.payload))
        finally:
            with self._lock:
                self.in_flight -= 1


@pytest.fixture()
def make_probe() -> Callable[..., FakeProbe]:
    """Factory for FakeProbe instances configured per test."""
    return FakeProbe


@pytest.fixture()
def fake_probe(make_probe) -> FakeProbe:
    return make_probe()


@pytest.fixture()
def app_settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        concurrency=ConcurrencyConfig(max_concurrent_probes=2),
    )


@pytest.fixture()
def audio_file(tmp_path) -> Path:
    p = tmp_path / "Artist - Song.mp3"
    p.write_bytes(b"ID3\x04\x00\x00\x00\x00\x00\x00")
    return p


@pytest.fixture()
def app(app_settings, fake_probe):
    app = create_app(app_settings)
    app.dependency_overrides[get_media_probe] = lambda: fake_probe
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def api_client(app):
    with TestClient(app) as client:
        yield client
