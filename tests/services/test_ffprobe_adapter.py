# tests/services/test_ffprobe_adapter.py
from __future__ import annotations
import json
import subprocess
from pathlib import Path

import pytest

import audioprobe.services.probe.ffprobe_adapter as adapter_mod
from audioprobe.common.settings import FFProbeConfig
from audioprobe.domain.errors import ErrorCode
from audioprobe.services.probe.ffprobe_adapter import FFprobeAdapter


@pytest.fixture()
def ffprobe_on_path(monkeypatch):
    monkeypatch.setattr(adapter_mod.shutil, "which", lambda name: f"/usr/bin/{name}")


def _fake_run(calls, *, rc=0, stdout=b"", stderr=b"", raises=None):
    def _run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        if raises is not None:
            raise raises
        return subprocess.CompletedProcess(cmd, rc, stdout=stdout, stderr=stderr)

    return _run


def test_missing_tool_is_reported_without_running_anything(monkeypatch):
    calls = []
    monkeypatch.setattr(adapter_mod.shutil, "which", lambda name: None)
    monkeypatch.setattr(adapter_mod.subprocess, "run", _fake_run(calls))

    adapter = FFprobeAdapter()
    r = adapter.probe(Path("/music/a.mp3"))

    assert not r.ok
    assert r.error.code is ErrorCode.TOOL_NOT_FOUND
    assert "ffprobe" in r.error.message
    assert calls == []
    assert adapter.is_available() is False


def test_probe_runs_ffprobe_with_json_flags_and_parses(monkeypatch, ffprobe_on_path, ffprobe_mp3):
    calls = []
    monkeypatch.setattr(
        adapter_mod.subprocess, "run", _fake_run(calls, stdout=json.dumps(ffprobe_mp3).encode("utf-8"))
    )

    r = FFprobeAdapter(FFProbeConfig(timeout_sec=5)).probe(Path("/music/a b.mp3"))

    assert r.ok
    raw = r.unwrap()
    assert raw.streams[0].codec_name == "mp3"
    assert raw.format.format_name == "mp3"

    (cmd, kwargs), = calls
    assert cmd[0] == "/usr/bin/ffprobe"
    assert cmd[1:3] == ["-v", "quiet"]
    assert "-show_format" in cmd and "-show_streams" in cmd
    assert cmd[-1] == "/music/a b.mp3"
    assert not kwargs.get("shell")
    assert kwargs["timeout"] == 5


def test_non_zero_exit_is_invocation_failure(monkeypatch, ffprobe_on_path):
    calls = []
    monkeypatch.setattr(
        adapter_mod.subprocess,
        "run",
        _fake_run(calls, rc=1, stderr=b"/music/a.mp3: Invalid data found when processing input\n"),
    )

    r = FFprobeAdapter().probe(Path("/music/a.mp3"))

    assert r.error.code is ErrorCode.INVOCATION_FAILED
    assert r.error.rc == 1
    assert "exit status 1" in r.error.message
    assert "Invalid data" in r.error.message


def test_os_error_is_invocation_failure(monkeypatch, ffprobe_on_path):
    calls = []
    monkeypatch.setattr(
        adapter_mod.subprocess, "run", _fake_run(calls, raises=PermissionError(13, "Permission denied"))
    )

    r = FFprobeAdapter().probe(Path("/music/a.mp3"))

    assert r.error.code is ErrorCode.INVOCATION_FAILED
    assert "Permission denied" in r.error.message


def test_timeout_is_invocation_failure(monkeypatch, ffprobe_on_path):
    calls = []
    monkeypatch.setattr(
        adapter_mod.subprocess,
        "run",
        _fake_run(calls, raises=subprocess.TimeoutExpired(cmd=["ffprobe"], timeout=2)),
    )

    r = FFprobeAdapter(FFProbeConfig(timeout_sec=2)).probe(Path("/music/a.mp3"))

    assert r.error.code is ErrorCode.INVOCATION_FAILED
    assert "timed out" in r.error.message


@pytest.mark.parametrize("stdout", [b"", b"{not json", b"[]", b'{"streams": "none"}'])
def test_unusable_output_is_malformed(monkeypatch, ffprobe_on_path, stdout):
    calls = []
    monkeypatch.setattr(adapter_mod.subprocess, "run", _fake_run(calls, stdout=stdout))

    r = FFprobeAdapter().probe(Path("/music/a.mp3"))

    assert r.error.code is ErrorCode.MALFORMED_OUTPUT
    assert r.error.message.startswith("Failed to parse ffprobe JSON output")


def test_undecodable_stdout_bytes_are_replaced(monkeypatch, ffprobe_on_path):
    calls = []
    stdout = (
        b'{"format": {"filename": "/music/b\xff.mp3", "format_name": "mp3"},'
        b' "streams": [{"codec_type": "audio", "codec_name": "mp3", "tags": {"title": "x\xfe"}}]}'
    )
    monkeypatch.setattr(adapter_mod.subprocess, "run", _fake_run(calls, stdout=stdout))

    r = FFprobeAdapter().probe(Path("/music/b.mp3"))

    assert r.ok
    raw = r.unwrap()
    assert raw.format.filename == "/music/b�.mp3"
    assert raw.streams[0].tags["title"] == "x�"
