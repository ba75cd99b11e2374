"""Webhook endpoint deciding whether an announced release should be grabbed."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..dependencies import get_query_service
from ..schemas import MediaCheckRequest
from ..services.query import QueryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["media"])


@router.post("/media-check", response_class=PlainTextResponse)
def media_check(
    payload: MediaCheckRequest,
    request: Request,
    query_service: QueryService = Depends(get_query_service),
) -> PlainTextResponse:
    """Answer 200 when the title is currently popular and 404 otherwise."""

    logger.info(
        "received media check request url=%s request=%s",
        request.url,
        payload.model_dump(exclude_none=True),
    )
    decision = query_service.should_download(payload.Title, payload.Year)
    return PlainTextResponse(decision.message, status_code=decision.status_code)
