"""Pipeline configuration: caption source enum and PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transcript_service.config import Settings


class SourceKind(str, Enum):
    """Available caption sources, each with its own raw segment shape."""

    CAPTION_TRACK = "caption_track"  # watch page + timedtext XML, seconds as strings
    JSON3 = "json3"  # InnerTube player + json3 events, milliseconds as numbers


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for the retrieval pipeline.

    Holds the source order and the two failure policies.  Defaults mirror
    the project's current behaviour (caption track first, skip malformed
    segments, soft "no transcript" when every source fails).
    """

    source_order: tuple[SourceKind, ...] = (SourceKind.CAPTION_TRACK, SourceKind.JSON3)
    skip_malformed: bool = True
    fail_on_total_source_error: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> PipelineConfig:
        return cls(
            skip_malformed=settings.skip_malformed_segments,
            fail_on_total_source_error=settings.fail_on_total_source_error,
        )
