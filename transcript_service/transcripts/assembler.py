"""Build the response envelope from normalized segments."""

from __future__ import annotations

from collections.abc import Iterable

from transcript_service.pipeline_config import SourceKind
from transcript_service.transcripts.models import (
    SUCCESS_MESSAGE,
    CaptionSegment,
    TranscriptResult,
)

# One caption per line in the joined transcript text.
TRANSCRIPT_DELIMITER = "\n"

TITLE_PREFIX = "Video_"


def title_for_video(video_id: str) -> str:
    """Deterministic placeholder title derived from the identifier alone."""
    return f"{TITLE_PREFIX}{video_id}"


def assemble_transcript(
    video_id: str,
    segments: Iterable[CaptionSegment],
    *,
    message: str = SUCCESS_MESSAGE,
    title: str | None = None,
    source: SourceKind | None = None,
) -> TranscriptResult:
    """Join segment texts with :data:`TRANSCRIPT_DELIMITER` and wrap them in a result.

    *title* falls back to :func:`title_for_video` when not given (or empty).
    """
    segments = tuple(segments)
    return TranscriptResult(
        message=message,
        title=title or title_for_video(video_id),
        transcript=TRANSCRIPT_DELIMITER.join(s.text for s in segments),
        segments=segments,
        source=source,
    )
