"""Tests for YouTube video identifier extraction."""

from __future__ import annotations

import pytest

from transcript_service.transcripts.video_id import extract_video_id

VIDEO_ID = "dQw4w9WgXcQ"


class TestRecognizedShapes:
    @pytest.mark.parametrize(
        "url",
        [
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtube.com/watch?v={VIDEO_ID}&t=42s",
            f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?si=abcdef",
            f"https://www.youtube.com/embed/{VIDEO_ID}",
            f"https://www.youtube.com/v/{VIDEO_ID}",
            f"https://www.youtube.com/user/u/1/{VIDEO_ID}",
            f"https://www.youtube.com/watch?v={VIDEO_ID}#comments",
            f"  https://www.youtube.com/watch?v={VIDEO_ID}  ",
        ],
    )
    def test_extracts_exact_token(self, url: str) -> None:
        assert extract_video_id(url) == VIDEO_ID

    def test_underscore_and_dash_ids(self) -> None:
        assert extract_video_id("https://youtu.be/a-b_c-d_e-f") == "a-b_c-d_e-f"


class TestRejectedInput:
    @pytest.mark.parametrize(
        "url",
        [
            "",
            "   ",
            None,
            VIDEO_ID,
            "https://example.com/page",
            "https://www.youtube.com/watch?v=short",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQX",
            "https://youtu.be/",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        ],
    )
    def test_returns_none(self, url: str | None) -> None:
        assert extract_video_id(url) is None
