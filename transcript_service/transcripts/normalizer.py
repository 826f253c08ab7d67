"""Normalize source-specific raw segments into canonical caption segments."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from transcript_service.pipeline_config import SourceKind
from transcript_service.transcripts.errors import FormatError
from transcript_service.transcripts.models import CaptionSegment, RawSegment

logger = logging.getLogger(__name__)

MILLISECONDS = Decimal(1000)


def _to_decimal(value: Any, field: str) -> Decimal:
    """Parse a timing value into a finite, non-negative Decimal."""
    if value is None or isinstance(value, bool):
        raise FormatError(f"Missing or invalid {field!r}: {value!r}")
    try:
        # str() first so floats keep their shortest repr (0.1, not 0.1000000000000000055)
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise FormatError(f"Non-numeric {field!r}: {value!r}") from exc
    if not number.is_finite() or number < 0:
        raise FormatError(f"Out-of-range {field!r}: {value!r}")
    return number


def format_seconds(value: Decimal) -> str:
    """Render seconds as a plain decimal string: no exponent, no trailing zeros."""
    return format(value.normalize(), "f")


def _seconds_string(value: Any, field: str) -> str:
    """Keep upstream second-strings verbatim once they are known to be numeric."""
    number = _to_decimal(value, field)
    if isinstance(value, str):
        return value.strip()
    return format_seconds(number)


def _text(raw: RawSegment) -> str:
    text = raw.get("text")
    if not isinstance(text, str):
        raise FormatError(f"Missing or invalid 'text': {text!r}")
    return text


def normalize_caption_track(raw: RawSegment) -> CaptionSegment:
    """Transcript-list entries: second strings pass through, numbers are rendered.

    ``duration`` is accepted in place of ``dur`` so canonical segments can be
    fed back in unchanged.
    """
    dur = raw["dur"] if "dur" in raw else raw.get("duration")
    return CaptionSegment(
        text=_text(raw),
        start=_seconds_string(raw.get("start"), "start"),
        duration=_seconds_string(dur, "dur"),
    )


def normalize_json3(raw: RawSegment) -> CaptionSegment:
    """json3 events: millisecond offsets and durations are converted to seconds."""
    return CaptionSegment(
        text=_text(raw),
        start=format_seconds(_to_decimal(raw.get("offset"), "offset") / MILLISECONDS),
        duration=format_seconds(_to_decimal(raw.get("duration"), "duration") / MILLISECONDS),
    )


NORMALIZERS: dict[SourceKind, Callable[[RawSegment], CaptionSegment]] = {
    SourceKind.CAPTION_TRACK: normalize_caption_track,
    SourceKind.JSON3: normalize_json3,
}


def normalize_segments(
    raw_segments: Sequence[RawSegment],
    kind: SourceKind,
    *,
    skip_malformed: bool = True,
    logger: logging.Logger | logging.LoggerAdapter[Any] = logger,
) -> list[CaptionSegment]:
    """Convert *raw_segments* from a *kind* source into canonical segments.

    Order is preserved.  A malformed entry raises :class:`FormatError`; with
    ``skip_malformed=True`` the entry is logged and dropped instead, and every
    well-formed entry is still returned.

    Raises:
        ValueError: If *kind* has no normalizer.
        FormatError: If an entry is malformed and ``skip_malformed`` is False.
    """
    normalizer = NORMALIZERS.get(kind)
    if normalizer is None:
        msg = f"No normalizer for source kind {kind!r}. Supported: {list(NORMALIZERS)}"
        raise ValueError(msg)

    segments: list[CaptionSegment] = []
    for index, raw in enumerate(raw_segments):
        try:
            if not isinstance(raw, dict):
                raise FormatError(f"Segment is not an object: {raw!r}")
            segments.append(normalizer(raw))
        except FormatError as exc:
            exc.index = index
            if not skip_malformed:
                raise
            logger.warning("Skipping malformed %s segment %d: %s", kind.value, index, exc)

    return segments
