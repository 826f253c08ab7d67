"""Transcript endpoints: fetch a video's captions and save transcript text."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, HTTPException

from transcript_service.api.models import (
    SaveTranscriptRequest,
    SaveTranscriptResponse,
    TranscriptResponse,
)
from transcript_service.config import settings
from transcript_service.transcripts.errors import PersistenceError, TranscriptUnavailableError
from transcript_service.transcripts.retrieval import build_retriever
from transcript_service.transcripts.storage import save_transcript
from transcript_service.transcripts.video_id import extract_video_id

router = APIRouter()

logger = logging.getLogger(__name__)

BLOCKED_DETAIL = "YouTube has blocked the request from this IP."
FETCH_ERROR_DETAIL = "Error fetching transcript"
SAVE_ERROR_DETAIL = "Error saving transcript"


class RequestLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Prefixes every message with the request id so one request can be traced."""

    def process(self, msg, kwargs):  # type: ignore[no-untyped-def]
        return f"[{self.extra['request_id']}] {msg}", kwargs


def _request_logger() -> RequestLogger:
    return RequestLogger(logger, {"request_id": uuid.uuid4().hex[:8]})


@router.get("/api/transcript", response_model=TranscriptResponse)
async def get_transcript(url: str | None = None) -> TranscriptResponse:
    """Fetch the timed caption transcript for a YouTube URL.

    - Missing URL or no recognizable video id: 400, no caption source is called.
    - No captions found (or every source failed): 200 with an explanatory
      message and empty segments.
    - Every source failed at the transport level while
      ``fail_on_total_source_error`` is enabled: 500 with a sanitized message.
    """
    if not url or not url.strip():
        raise HTTPException(status_code=400, detail="URL is required")

    video_id = extract_video_id(url)
    if video_id is None:
        raise HTTPException(status_code=400, detail="Invalid YouTube URL")

    request_logger = _request_logger()
    request_logger.info("Fetching transcript for %s", video_id)

    retriever = build_retriever(settings, logger=request_logger)
    try:
        result = await retriever.retrieve(video_id)
    except TranscriptUnavailableError as exc:
        request_logger.error("Transcript retrieval failed for %s: %s", video_id, exc)
        # Upstream error text stays in the logs; clients get a fixed message.
        detail = BLOCKED_DETAIL if exc.blocked else FETCH_ERROR_DETAIL
        raise HTTPException(status_code=500, detail=detail) from exc

    return TranscriptResponse.from_result(result)


@router.post("/api/transcript", response_model=SaveTranscriptResponse)
def post_transcript(request: SaveTranscriptRequest) -> SaveTranscriptResponse:
    """Save transcript text to ``<transcripts_dir>/<safe title>.txt``."""
    try:
        file_name = save_transcript(request.title, request.transcript, settings.transcripts_dir)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail=SAVE_ERROR_DETAIL) from exc

    return SaveTranscriptResponse(message="Transcript saved successfully", file_name=file_name)
