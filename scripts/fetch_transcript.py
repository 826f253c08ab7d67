"""Fetch a YouTube transcript from the command line, optionally saving it."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from transcript_service.config import settings
from transcript_service.transcripts.errors import PersistenceError, TranscriptUnavailableError
from transcript_service.transcripts.retrieval import build_retriever
from transcript_service.transcripts.storage import save_transcript
from transcript_service.transcripts.video_id import extract_video_id


async def fetch(url: str, save: bool, output_dir: str) -> int:
    video_id = extract_video_id(url)
    if video_id is None:
        print(f"ERROR: could not find a video id in {url!r}", file=sys.stderr)
        return 2

    try:
        result = await build_retriever(settings).retrieve(video_id)
    except TranscriptUnavailableError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"{result.message} -- {len(result.segments)} segments from {result.source or 'no source'}")
    for segment in result.segments[:5]:
        print(f"  [{segment.start}s +{segment.duration}s] {segment.text}")

    if save and result.found:
        try:
            file_name = save_transcript(result.title, result.transcript, output_dir)
        except PersistenceError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        print(f"Saved to {Path(output_dir) / file_name}")

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("url")
    parser.add_argument("--save", action="store_true")
    parser.add_argument("--dir", default=settings.transcripts_dir)
    args = parser.parse_args()
    sys.exit(asyncio.run(fetch(args.url, args.save, args.dir)))
