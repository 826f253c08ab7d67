"""Fallback orchestration: try caption sources in order until one yields segments."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from transcript_service.config import Settings
from transcript_service.pipeline_config import PipelineConfig
from transcript_service.transcripts.assembler import assemble_transcript
from transcript_service.transcripts.errors import (
    FormatError,
    SourceError,
    TranscriptUnavailableError,
)
from transcript_service.transcripts.models import NO_TRANSCRIPT_MESSAGE, TranscriptResult
from transcript_service.transcripts.normalizer import normalize_segments
from transcript_service.transcripts.sources import CaptionSource, build_sources
from transcript_service.transcripts.titles import fetch_video_title

logger = logging.getLogger(__name__)

TitleLookup = Callable[[str], Awaitable[str | None]]


class TranscriptRetriever:
    """Drive caption sources in priority order and build one TranscriptResult.

    Sources are called strictly one after another and each at most once.  The
    first source whose normalized output is non-empty wins; outputs of
    different sources are never merged.  A source that raises
    :class:`SourceError`, returns nothing, or returns only malformed entries
    hands over to the next one.  When all sources are exhausted the result is
    the "no transcript" envelope, unless ``fail_on_total_source_error`` is set
    and every source failed at the transport level, in which case
    :class:`TranscriptUnavailableError` is raised.
    """

    def __init__(
        self,
        sources: Sequence[CaptionSource],
        *,
        skip_malformed: bool = True,
        fail_on_total_source_error: bool = False,
        title_lookup: TitleLookup | None = None,
        logger: logging.Logger | logging.LoggerAdapter[Any] = logger,
    ) -> None:
        self.sources = list(sources)
        self.skip_malformed = skip_malformed
        self.fail_on_total_source_error = fail_on_total_source_error
        self.title_lookup = title_lookup
        self.logger = logger

    async def retrieve(self, video_id: str) -> TranscriptResult:
        failures: list[SourceError] = []

        for source in self.sources:
            name = source.kind.value
            try:
                raw = await source.fetch(video_id)
            except SourceError as exc:
                failures.append(exc)
                self.logger.warning(
                    "Caption source %s failed for %s (status=%s, blocked=%s): %s",
                    name,
                    video_id,
                    exc.status_code,
                    exc.blocked,
                    exc,
                )
                continue

            try:
                segments = normalize_segments(
                    raw, source.kind, skip_malformed=self.skip_malformed, logger=self.logger
                )
            except FormatError as exc:
                self.logger.warning(
                    "Caption source %s returned malformed segment %s for %s: %s",
                    name,
                    exc.index,
                    video_id,
                    exc,
                )
                continue

            if not segments:
                self.logger.info("Caption source %s returned no segments for %s", name, video_id)
                continue

            self.logger.info(
                "Fetched %d segments for %s from %s", len(segments), video_id, name
            )
            title = await self._lookup_title(video_id)
            return assemble_transcript(video_id, segments, title=title, source=source.kind)

        if self.fail_on_total_source_error and failures and len(failures) == len(self.sources):
            raise TranscriptUnavailableError(failures)

        self.logger.warning("No transcript available for %s", video_id)
        return assemble_transcript(video_id, [], message=NO_TRANSCRIPT_MESSAGE)

    async def _lookup_title(self, video_id: str) -> str | None:
        if self.title_lookup is None:
            return None
        try:
            return await self.title_lookup(video_id)
        except Exception as exc:
            # Best effort: the placeholder title stands in
            self.logger.warning("Title lookup failed for %s: %s", video_id, exc)
            return None


def build_retriever(
    settings: Settings,
    *,
    logger: logging.Logger | logging.LoggerAdapter[Any] = logger,
) -> TranscriptRetriever:
    """Wire a TranscriptRetriever from application settings."""
    config = PipelineConfig.from_settings(settings)
    sources = build_sources(
        config.source_order,
        language=settings.caption_language,
        timeout=settings.request_timeout,
    )
    title_lookup = None
    if settings.resolve_titles:
        title_lookup = functools.partial(fetch_video_title, timeout=settings.request_timeout)
    return TranscriptRetriever(
        sources,
        skip_malformed=config.skip_malformed,
        fail_on_total_source_error=config.fail_on_total_source_error,
        title_lookup=title_lookup,
        logger=logger,
    )
