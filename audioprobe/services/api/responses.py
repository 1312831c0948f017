# audioprobe/services/api/responses.py
"""JSON envelopes for every response the analyze endpoint produces."""
from __future__ import annotations

from http import HTTPStatus
from typing import Mapping, Optional

from fastapi.responses import JSONResponse

from audioprobe.domain.entities.audio_metadata import AudioMetadata
from audioprobe.services.schemas.analyze import AudioMetadataRead, ErrorEnvelope, SuccessEnvelope


def success_response(metadata: AudioMetadata) -> JSONResponse:
    body = SuccessEnvelope(data=AudioMetadataRead.model_validate(metadata))
    # exclude_none drops the tags the file does not carry
    return JSONResponse(body.model_dump(exclude_none=True), status_code=HTTPStatus.OK)


def error_response(
    message: str,
    status_code: int,
    *,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    body = ErrorEnvelope(message=message)
    return JSONResponse(body.model_dump(), status_code=int(status_code), headers=dict(headers) if headers else None)
