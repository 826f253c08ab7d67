"""Caption sources: each wraps one upstream mechanism for fetching timed captions.

Two sources are available:

- :class:`CaptionTrackSource` uses ``youtube_transcript_api`` to list the
  video's transcripts and fetch the one for the target language.  Raw
  segments look like ``{"text": ..., "start": 1.23, "dur": 2.5}`` (seconds).
- :class:`Json3CaptionSource` uses ``yt_dlp`` to extract the subtitle
  formats and downloads the ``json3`` track.  Raw segments look like
  ``{"text": ..., "offset": 1230, "duration": 2500}`` (milliseconds).

Both libraries are synchronous, so :meth:`CaptionSource.fetch` runs the
download in a worker thread.  Both return an empty list when the video has
no captions in the target language and raise :class:`SourceError` on
transport, block or payload failure.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

import yt_dlp
from youtube_transcript_api import YouTubeTranscriptApi
from youtube_transcript_api._errors import (
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    RequestBlocked,
    TranscriptsDisabled,
)
from yt_dlp.networking.exceptions import HTTPError, RequestError
from yt_dlp.utils import DownloadError

from transcript_service.pipeline_config import SourceKind
from transcript_service.transcripts.errors import SourceError
from transcript_service.transcripts.models import RawSegment

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

YDL_PARAMS = {
    "quiet": True,
    "no_warnings": True,
    "skip_download": True,
    "noplaylist": True,
}

# Phrases yt-dlp reports when YouTube refuses the client rather than the video
_BLOCK_MARKERS = ("not a bot", "HTTP Error 429", "Too Many Requests")


def _clean_text(text: str) -> str:
    """Collapse whitespace; the text itself is passed through untouched."""
    return " ".join(text.split())


class CaptionSource(ABC):
    """A single upstream caption mechanism.

    Instances hold no per-request state and can be shared.
    """

    kind: SourceKind

    def __init__(self, language: str = "en", *, timeout: float = 15.0) -> None:
        self.language = language
        self.timeout = timeout

    async def fetch(self, video_id: str) -> list[RawSegment]:
        """Return raw segments in upstream order, or ``[]`` if there are no captions."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._download, video_id), timeout=self.timeout
            )
        except TimeoutError as exc:
            raise self._error(f"Timed out after {self.timeout}s") from exc
        except (AttributeError, TypeError, KeyError) as exc:
            # Upstream payload did not have the shape the library promised
            raise self._error(f"Unexpected caption payload: {exc!r}") from exc

    @abstractmethod
    def _download(self, video_id: str) -> list[RawSegment]:
        """Blocking download; runs in a worker thread."""

    def _error(
        self, message: str, *, status_code: int | None = None, blocked: bool | None = None
    ) -> SourceError:
        return SourceError(
            message, source=self.kind.value, status_code=status_code, blocked=blocked
        )


class CaptionTrackSource(CaptionSource):
    """Transcript list + timedtext download via youtube-transcript-api."""

    kind = SourceKind.CAPTION_TRACK

    def __init__(
        self,
        language: str = "en",
        *,
        timeout: float = 15.0,
        api: YouTubeTranscriptApi | None = None,
    ) -> None:
        super().__init__(language, timeout=timeout)
        self.api = api if api is not None else YouTubeTranscriptApi()

    def _download(self, video_id: str) -> list[RawSegment]:
        try:
            transcripts = self.api.list(video_id)
            transcript = self._pick(transcripts)
            if transcript is None:
                return []
            snippets = transcript.fetch()
        except (TranscriptsDisabled, NoTranscriptFound):
            return []
        except RequestBlocked as exc:
            raise self._error(f"Transcript request blocked: {exc}", blocked=True) from exc
        except CouldNotRetrieveTranscript as exc:
            raise self._error(f"Could not retrieve transcript: {exc}") from exc
        except OSError as exc:
            # requests' connection and timeout errors
            raise self._error(f"Transcript request failed: {exc}") from exc

        segments: list[RawSegment] = []
        for snippet in snippets:
            text = _clean_text(snippet.text)
            if text:
                segments.append({"text": text, "start": snippet.start, "dur": snippet.duration})
        return segments

    def _pick(self, transcripts: Any) -> Any | None:
        """Manually created transcript first, then the auto-generated one."""
        for find in (
            transcripts.find_manually_created_transcript,
            transcripts.find_generated_transcript,
        ):
            try:
                return find([self.language])
            except NoTranscriptFound:
                continue
        return None


class Json3CaptionSource(CaptionSource):
    """yt-dlp subtitle extraction + json3 track download."""

    kind = SourceKind.JSON3

    def __init__(
        self,
        language: str = "en",
        *,
        timeout: float = 15.0,
        ydl_factory: Callable[[dict[str, Any]], Any] = yt_dlp.YoutubeDL,
    ) -> None:
        super().__init__(language, timeout=timeout)
        self.ydl_factory = ydl_factory

    def _download(self, video_id: str) -> list[RawSegment]:
        params = {**YDL_PARAMS, "socket_timeout": self.timeout}
        try:
            with self.ydl_factory(params) as ydl:
                info = ydl.extract_info(WATCH_URL.format(video_id=video_id), download=False)
                if not isinstance(info, dict):
                    raise self._error("yt-dlp returned no video metadata")

                url = self._track_url(info)
                if url is None:
                    return []
                with ydl.urlopen(url) as response:
                    body = response.read()
        except DownloadError as exc:
            message = str(exc)
            raise self._error(
                f"Subtitle extraction failed: {message}",
                blocked=any(marker in message for marker in _BLOCK_MARKERS),
            ) from exc
        except HTTPError as exc:
            raise self._error(
                f"json3 download returned HTTP {exc.status}", status_code=exc.status
            ) from exc
        except (RequestError, OSError) as exc:
            raise self._error(f"json3 download failed: {exc}") from exc

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise self._error(f"json3 track is not JSON: {exc}") from exc
        return self._parse_events(payload)

    def _languages(self, tracks: dict[str, Any]) -> list[str]:
        """Exact language code first, then regional variants (``en-US``)."""
        exact = [self.language] if self.language in tracks else []
        regional = sorted(k for k in tracks if k.startswith(f"{self.language}-"))
        return exact + regional

    def _track_url(self, info: dict[str, Any]) -> str | None:
        """URL of the json3 format, preferring manual subtitles over automatic captions."""
        for key in ("subtitles", "automatic_captions"):
            tracks = info.get(key) or {}
            if not isinstance(tracks, dict):
                raise self._error(f"yt-dlp {key} is not a mapping")
            for language in self._languages(tracks):
                for fmt in tracks[language] or []:
                    if isinstance(fmt, dict) and fmt.get("ext") == "json3" and fmt.get("url"):
                        return str(fmt["url"])
        return None

    def _parse_events(self, payload: Any) -> list[RawSegment]:
        if not isinstance(payload, dict):
            raise self._error("json3 payload is not an object")
        events = payload.get("events") or []
        if not isinstance(events, list):
            raise self._error("json3 events is not an array")

        segments: list[RawSegment] = []
        for event in events:
            if not isinstance(event, dict):
                raise self._error("json3 event is not an object")
            segs = event.get("segs")
            if not segs:
                continue  # window/style events carry no text
            if not isinstance(segs, list) or not all(isinstance(s, dict) for s in segs):
                raise self._error("json3 event segs are malformed")
            text = _clean_text("".join(str(s.get("utf8", "")) for s in segs))
            if not text:
                continue
            segments.append(
                {
                    "text": text,
                    "offset": event.get("tStartMs"),
                    "duration": event.get("dDurationMs"),
                }
            )
        return segments


SOURCE_CLASSES: dict[SourceKind, type[CaptionSource]] = {
    SourceKind.CAPTION_TRACK: CaptionTrackSource,
    SourceKind.JSON3: Json3CaptionSource,
}


def build_sources(
    order: Iterable[SourceKind], *, language: str, timeout: float
) -> list[CaptionSource]:
    """Instantiate caption sources in the given priority order."""
    return [SOURCE_CLASSES[kind](language, timeout=timeout) for kind in order]
