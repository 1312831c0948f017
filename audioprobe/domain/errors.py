from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Optional


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    NOT_FOUND = "NOT_FOUND"

    # probing phase
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    INVOCATION_FAILED = "INVOCATION_FAILED"
    MALFORMED_OUTPUT = "MALFORMED_OUTPUT"
    NO_AUDIO_STREAM = "NO_AUDIO_STREAM"

    # anything that blew up inside the handler itself
    INTERNAL = "INTERNAL"


_HTTP_STATUS: dict[ErrorCode, HTTPStatus] = {
    ErrorCode.BAD_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorCode.METHOD_NOT_ALLOWED: HTTPStatus.METHOD_NOT_ALLOWED,
    ErrorCode.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.TOOL_NOT_FOUND: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.INVOCATION_FAILED: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.MALFORMED_OUTPUT: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.NO_AUDIO_STREAM: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def http_status_for(code: ErrorCode) -> HTTPStatus:
    return _HTTP_STATUS[code]


@dataclass(frozen=True)
class AnalyzeError:
    """A failure on its way to the error envelope; `message` is what the caller sees."""
    code: ErrorCode
    message: str
    stderr: Optional[str] = None
    rc: Optional[int] = None
