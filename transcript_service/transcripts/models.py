"""Data models for the transcript retrieval pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from transcript_service.pipeline_config import SourceKind

# Upstream-specific record as returned by a caption source. Field names and
# timing units depend on the source kind.
RawSegment = dict[str, Any]

SUCCESS_MESSAGE = "Transcript fetched successfully"
NO_TRANSCRIPT_MESSAGE = "No transcript available (IP might be blocked or no captions found)"


@dataclass(frozen=True)
class CaptionSegment:
    """Canonical transcript segment; timings are decimal strings in seconds."""

    text: str
    start: str
    duration: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "start": self.start, "duration": self.duration}


@dataclass(frozen=True)
class TranscriptResult:
    """Response envelope for one retrieval request."""

    message: str
    title: str
    transcript: str
    segments: tuple[CaptionSegment, ...] = field(default_factory=tuple)
    source: SourceKind | None = None

    @property
    def found(self) -> bool:
        return bool(self.segments)
