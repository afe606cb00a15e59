"""Moderation router -- run review text through the moderation pipeline.

Prefix: ``/api/moderation``
"""

from __future__ import annotations

from fastapi import APIRouter

from rtw.moderation.models import ModerationVerdict
from rtw.moderation.pipeline import default_pipeline
from web.backend.app.models.api import (
    BulkModerateRequest,
    ModerateRequest,
    ModerationVerdictResponse,
    SanitizeRequest,
    SanitizeResponse,
)

router = APIRouter(prefix="/api/moderation", tags=["moderation"])


def _verdict_response(verdict: ModerationVerdict) -> ModerationVerdictResponse:
    return ModerationVerdictResponse(**verdict.to_dict())


@router.post("/moderate", response_model=ModerationVerdictResponse)
async def moderate(request: ModerateRequest):
    """Moderate one piece of review text."""
    return _verdict_response(default_pipeline().moderate(request.text))


@router.post("/bulk", response_model=list[ModerationVerdictResponse])
async def moderate_bulk(request: BulkModerateRequest):
    """Moderate several texts; verdicts come back in request order."""
    return [_verdict_response(v) for v in default_pipeline().moderate_many(request.texts)]


@router.post("/sanitize", response_model=SanitizeResponse)
async def sanitize(request: SanitizeRequest):
    """Strip markup and mask profanity for display."""
    return SanitizeResponse(text=default_pipeline().sanitize(request.text))
