"""Tests for Settings, PipelineConfig and the SourceKind enum."""

from __future__ import annotations

import pytest

from transcript_service.config import Settings, get_settings
from transcript_service.pipeline_config import PipelineConfig, SourceKind

# ---------------------------------------------------------------------------
# Enum tests
# ---------------------------------------------------------------------------


class TestSourceKind:
    def test_values(self) -> None:
        assert SourceKind.CAPTION_TRACK.value == "caption_track"
        assert SourceKind.JSON3.value == "json3"

    def test_from_string(self) -> None:
        assert SourceKind("caption_track") is SourceKind.CAPTION_TRACK
        assert SourceKind("json3") is SourceKind.JSON3

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            SourceKind("invalid")

    def test_is_str_subclass(self) -> None:
        """Enum values behave as plain strings for JSON serialization."""
        assert isinstance(SourceKind.JSON3, str)


# ---------------------------------------------------------------------------
# PipelineConfig tests
# ---------------------------------------------------------------------------


class TestPipelineConfig:
    def test_defaults(self) -> None:
        cfg = PipelineConfig()
        assert cfg.source_order == (SourceKind.CAPTION_TRACK, SourceKind.JSON3)
        assert cfg.skip_malformed is True
        assert cfg.fail_on_total_source_error is False

    def test_immutable(self) -> None:
        cfg = PipelineConfig()
        with pytest.raises(AttributeError):
            cfg.skip_malformed = False  # type: ignore[misc]

    def test_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            skip_malformed_segments=False,
            fail_on_total_source_error=True,
        )
        cfg = PipelineConfig.from_settings(settings)
        assert cfg.skip_malformed is False
        assert cfg.fail_on_total_source_error is True
        assert cfg.source_order[0] is SourceKind.CAPTION_TRACK


# ---------------------------------------------------------------------------
# Settings tests
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("CAPTION_LANGUAGE", "TRANSCRIPTS_DIR", "FAIL_ON_TOTAL_SOURCE_ERROR"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.caption_language == "en"
        assert settings.transcripts_dir == "transcripts"
        assert settings.skip_malformed_segments is True
        assert settings.fail_on_total_source_error is False
        assert settings.resolve_titles is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CAPTION_LANGUAGE", "de")
        monkeypatch.setenv("FAIL_ON_TOTAL_SOURCE_ERROR", "true")
        monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.caption_language == "de"
        assert settings.fail_on_total_source_error is True
        assert settings.request_timeout == 2.5

    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()
