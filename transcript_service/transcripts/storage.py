"""Filesystem storage for saved transcripts."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from transcript_service.transcripts.errors import PersistenceError

logger = logging.getLogger(__name__)

TRANSCRIPT_EXTENSION = ".txt"

_UNSAFE_CHARS_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def safe_file_name(title: str) -> str:
    """Replace every non-alphanumeric character with ``_``, lower-case, add ``.txt``."""
    return _UNSAFE_CHARS_RE.sub("_", title).lower() + TRANSCRIPT_EXTENSION


def save_transcript(title: str, transcript: str, directory: str | Path) -> str:
    """Write *transcript* to ``<directory>/<safe title>.txt`` and return the file name.

    The directory is created when missing.  An existing file with the same
    name is overwritten.

    Raises:
        ValueError: If *title* or *transcript* is empty.
        PersistenceError: If the directory or file cannot be written.
    """
    if not title or not transcript:
        raise ValueError("Title and transcript are required")

    file_name = safe_file_name(title)
    output_dir = Path(directory)
    output_path = output_dir / file_name

    logger.info("Saving transcript to %s", output_path)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_text(transcript, encoding="utf-8")
    except OSError as exc:
        logger.exception("Failed to save transcript to %s", output_path)
        raise PersistenceError(f"Could not write {output_path}: {exc}") from exc

    return file_name
