"""Pydantic request/response schemas for the Transcript API."""

from __future__ import annotations

from pydantic import BaseModel

from transcript_service.pipeline_config import SourceKind
from transcript_service.transcripts.models import TranscriptResult


class TranscriptSegmentResponse(BaseModel):
    """A single caption segment; start and duration are seconds as decimal strings."""

    text: str
    start: str
    duration: str


class TranscriptResponse(BaseModel):
    """Response body for GET /api/transcript.

    ``segments`` is empty (and ``message`` says so) when no source had
    captions; that is still a 200.
    """

    message: str
    title: str
    transcript: str
    segments: list[TranscriptSegmentResponse] = []
    source: SourceKind | None = None

    @classmethod
    def from_result(cls, result: TranscriptResult) -> TranscriptResponse:
        return cls(
            message=result.message,
            title=result.title,
            transcript=result.transcript,
            segments=[TranscriptSegmentResponse(**s.to_dict()) for s in result.segments],
            source=result.source,
        )


class SaveTranscriptRequest(BaseModel):
    """Request body for POST /api/transcript.

    Fields default to empty so a missing title or transcript is reported as
    a 400 with a readable message rather than a 422.
    """

    url: str | None = None
    title: str = ""
    transcript: str = ""


class SaveTranscriptResponse(BaseModel):
    """Response body for POST /api/transcript."""

    message: str
    file_name: str
