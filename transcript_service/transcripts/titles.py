"""Best-effort video title lookup via the public oEmbed endpoint."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

OEMBED_URL = "https://www.youtube.com/oembed"


async def fetch_video_title(
    video_id: str,
    *,
    timeout: float = 5.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """Return the human-readable title for *video_id*, or ``None`` on any failure.

    Transcript retrieval never depends on this call; callers fall back to
    the identifier-derived placeholder.
    """
    params = {"url": f"https://www.youtube.com/watch?v={video_id}", "format": "json"}
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            r = await client.get(OEMBED_URL, params=params)
            r.raise_for_status()
            title = r.json().get("title")
    except (httpx.HTTPError, ValueError, AttributeError) as exc:
        logger.info("Title lookup failed for %s: %s", video_id, exc)
        return None

    if not isinstance(title, str) or not title.strip():
        return None
    return title.strip()
