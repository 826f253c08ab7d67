"""Exception taxonomy for transcript retrieval and persistence."""

from __future__ import annotations

# Upstream signals that the caller's IP is being throttled or refused.
BLOCKED_STATUS_CODES = frozenset({410, 429})


class TranscriptError(Exception):
    """Base class for all transcript pipeline errors."""


class SourceError(TranscriptError):
    """Transport or protocol failure from a single caption source.

    Never raised for "no captions in this language"; sources return an
    empty list for that case.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        status_code: int | None = None,
        blocked: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.status_code = status_code
        if blocked is None:
            blocked = status_code in BLOCKED_STATUS_CODES
        self.blocked = blocked


class FormatError(TranscriptError):
    """A single raw segment could not be normalized."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class PersistenceError(TranscriptError):
    """Writing a transcript to storage failed."""


class TranscriptUnavailableError(TranscriptError):
    """Every caption source failed at the transport level."""

    def __init__(self, failures: list[SourceError]) -> None:
        sources = ", ".join(f.source or "unknown" for f in failures)
        super().__init__(f"All caption sources failed: {sources}")
        self.failures = failures
        self.blocked = any(f.blocked for f in failures)
