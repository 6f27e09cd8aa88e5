"""Batched creation timestamp extraction with ExifTool.

One exiftool process is started per batch of files instead of per file;
on large libraries process start-up dominates otherwise.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from livephoto_repair.common import normalize_path
from livephoto_repair.matching.models import AssetKind, CaptureTimestamp
from ..errors import MetadataExtractionError, classify_error
from .datetime_parser import parse_exif_datetime

logger = logging.getLogger(__name__)

# Images: EXIF CreateDate. Videos: QuickTime CreationDate (local time + offset).
IMAGE_TIMESTAMP_TAG = 'CreateDate'
VIDEO_TIMESTAMP_TAG = 'CreationDate'


def run_exiftool_batch(file_paths: Sequence[Path], timeout: float = 60.0) -> List[Dict[str, Any]]:
    """
    Run exiftool on a batch of files and return one metadata dict per file.

    Exit code 1 means exiftool hit per-file problems (unreadable or missing
    tags) but still produced output for the rest, so it is not an error.

    Args:
        file_paths: Files to read
        timeout: Seconds before the exiftool process is killed

    Returns:
        List of dicts with 'SourceFile' plus whatever requested tags were present

    Raises:
        FileNotFoundError: If exiftool is not available
        MetadataExtractionError: If exiftool fails, times out, or emits unparseable output
    """
    if not file_paths:
        return []

    cmd = [
        'exiftool',
        '-json',
        '-charset', 'filename=utf8',
        f'-{IMAGE_TIMESTAMP_TAG}',
        f'-{VIDEO_TIMESTAMP_TAG}',
        *[str(p) for p in file_paths],
    ]

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding='utf-8',
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.warning("exiftool not found - timestamp extraction disabled")
        raise
    except subprocess.TimeoutExpired as e:
        raise MetadataExtractionError(
            f"exiftool timed out on batch of {len(file_paths)} files",
            files=len(file_paths),
            timeout=timeout,
        ) from e

    if result.returncode not in (0, 1):
        raise MetadataExtractionError(
            f"exiftool failed with exit code {result.returncode}: {result.stderr.strip()[:200]}",
            files=len(file_paths),
            returncode=result.returncode,
        )

    if not result.stdout.strip():
        return []

    try:
        records = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise MetadataExtractionError(
            f"Failed to parse exiftool output: {e}",
            files=len(file_paths),
        ) from e

    if not isinstance(records, list):
        raise MetadataExtractionError("Unexpected exiftool output shape", files=len(file_paths))

    return records


def extract_timestamps(
    files: Sequence[Tuple[Path, AssetKind]],
    batch_size: int = 200,
    timeout: float = 60.0,
) -> Dict[Path, CaptureTimestamp]:
    """
    Read creation timestamps for images and videos in batches.

    A failed batch is logged and skipped; its files simply get no timestamp.

    Args:
        files: (path, kind) pairs; kind selects which tag applies
        batch_size: Files per exiftool invocation
        timeout: Timeout per batch in seconds

    Returns:
        Mapping of path to tagged timestamp, only for files where one was found

    Raises:
        FileNotFoundError: If exiftool is not available
    """
    timestamps: Dict[Path, CaptureTimestamp] = {}
    if not files:
        return timestamps

    total_batches = (len(files) + batch_size - 1) // batch_size
    logger.info(f"Extracting timestamps: {{'files': {len(files)}, 'batches': {total_batches}}}")

    for batch_number, start in enumerate(range(0, len(files), batch_size), start=1):
        batch = files[start:start + batch_size]
        kinds = {normalize_path(path): (path, kind) for path, kind in batch}

        try:
            records = run_exiftool_batch([path for path, _ in batch], timeout=timeout)
        except MetadataExtractionError as e:
            cause = e.__cause__ or e
            logger.error(
                f"Timestamp batch failed: {{'batch': {batch_number}, 'files': {len(batch)}, "
                f"'category': {classify_error(cause)!r}, 'error': {e.message!r}}}"
            )
            continue

        for record in records:
            source = record.get('SourceFile')
            if not source:
                continue
            entry = kinds.get(normalize_path(source))
            if entry is None:
                logger.debug(f"Unexpected exiftool record: {{'source': {source!r}}}")
                continue
            path, kind = entry

            timestamp = _timestamp_from_record(record, kind)
            if timestamp is not None:
                timestamps[path] = timestamp

        logger.debug(f"Timestamp batch complete: {{'batch': {batch_number}, 'of': {total_batches}}}")

    logger.info(f"Timestamps extracted: {{'found': {len(timestamps)}, 'files': {len(files)}}}")
    return timestamps


def _timestamp_from_record(record: Dict[str, Any], kind: AssetKind) -> Optional[CaptureTimestamp]:
    if kind is AssetKind.IMAGE:
        value = parse_exif_datetime(record.get(IMAGE_TIMESTAMP_TAG))
        return CaptureTimestamp.exif(value) if value else None

    value = parse_exif_datetime(record.get(VIDEO_TIMESTAMP_TAG))
    return CaptureTimestamp.quicktime(value) if value else None
