"""YouTube video identifier extraction."""

from __future__ import annotations

import re

VIDEO_ID_LENGTH = 11

# Recognized shapes: youtu.be/<id>, v/<id>, u/<w>/<id>, embed/<id>, watch?v=<id>, &v=<id>.
# The capture stops at the first fragment, query or parameter separator.
VIDEO_URL_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def extract_video_id(url: str | None) -> str | None:
    """Return the 11-character video identifier embedded in *url*.

    Returns ``None`` (never raises) when *url* is empty, matches none of the
    recognized shapes, or the captured token is not exactly 11 characters.
    """
    if not url:
        return None

    match = VIDEO_URL_RE.match(url.strip())
    if match is None:
        return None

    candidate = match.group(2)
    if len(candidate) != VIDEO_ID_LENGTH:
        return None
    return candidate
