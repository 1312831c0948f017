# audioprobe/services/api/routers/analyze.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from audioprobe.domain.errors import ErrorCode, http_status_for
from audioprobe.services.analyze.service import AnalyzeService
from audioprobe.services.api.deps import get_analyze_service
from audioprobe.services.api.responses import error_response, success_response
from audioprobe.services.schemas.analyze import ErrorEnvelope, SuccessEnvelope

router = APIRouter(tags=["analyze"])

# Registered for every verb so the handler itself answers 405 with the error envelope.
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route(
    "/analyze",
    methods=ANY_METHOD,
    response_model=SuccessEnvelope,
    responses={
        400: {"model": ErrorEnvelope},
        404: {"model": ErrorEnvelope},
        405: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    },
)
def analyze(
    request: Request,
    f: Optional[str] = Query(None, description="Path of the audio file on the server (absolute or relative to its working dir)"),
    service: AnalyzeService = Depends(get_analyze_service),
) -> JSONResponse:
    if request.method != "GET":
        return error_response(
            "Method not supported. Use GET.",
            http_status_for(ErrorCode.METHOD_NOT_ALLOWED),
            headers={"Allow": "GET"},
        )

    if not f:
        return error_response("Parameter 'f' (file path) is required.", http_status_for(ErrorCode.BAD_REQUEST))

    # Blocks this worker thread until a gate slot frees up.
    result = service.analyze(f)
    if result.error is not None:
        return error_response(result.error.message, http_status_for(result.error.code))
    return success_response(result.unwrap())
