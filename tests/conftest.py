"""Shared fixtures: a TestClient, scripted caption sources and a fake yt-dlp (no network)."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from transcript_service.api.main import app
from transcript_service.pipeline_config import SourceKind
from transcript_service.transcripts.models import RawSegment
from transcript_service.transcripts.sources import CaptionSource


class ScriptedSource(CaptionSource):
    """Caption source that returns a fixed result (or raises) and records calls."""

    def __init__(
        self,
        kind: SourceKind,
        segments: list[RawSegment] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.kind = kind
        self.segments = segments or []
        self.error = error
        self.calls: list[str] = []

    def _download(self, video_id: str) -> list[RawSegment]:
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return list(self.segments)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def scripted_source() -> Callable[..., ScriptedSource]:
    return ScriptedSource


def make_ydl_factory(info: dict[str, Any] | None, body: bytes = b"") -> MagicMock:
    """Stand-in for ``yt_dlp.YoutubeDL``: extract_info returns *info*, urlopen serves *body*."""
    ydl = MagicMock()
    ydl.extract_info.return_value = info
    ydl.urlopen.return_value = io.BytesIO(body)
    factory = MagicMock()
    factory.return_value.__enter__.return_value = ydl
    return factory


@pytest.fixture
def ydl_factory() -> Callable[..., MagicMock]:
    return make_ydl_factory
