"""Video metadata extraction using ffprobe."""

import json
import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

from ..errors import classify_error

logger = logging.getLogger(__name__)

# QuickTime key written by iOS, same value exiftool reports as CreationDate
QUICKTIME_CREATIONDATE_KEY = 'com.apple.quicktime.creationdate'


def extract_video_metadata(file_path: Path, timeout: float = 30.0) -> Dict[str, Any]:
    """
    Extract video metadata using ffprobe.

    Extracts:
    - duration_seconds: float
    - width: int
    - height: int
    - frame_rate: float
    - creation_date: datetime (from com.apple.quicktime.creationdate, when present)

    Args:
        file_path: Path to video file
        timeout: Seconds before ffprobe is killed

    Returns:
        Dictionary with video metadata

    Raises:
        FileNotFoundError: If ffprobe is not available
        subprocess.CalledProcessError: If ffprobe fails
        subprocess.TimeoutExpired: If ffprobe does not finish in time
        json.JSONDecodeError: If ffprobe output is not JSON
    """
    metadata: Dict[str, Any] = {}

    try:
        result = subprocess.run(
            [
                'ffprobe',
                '-v', 'quiet',
                '-print_format', 'json',
                '-show_format',
                '-show_streams',
                str(file_path)
            ],
            capture_output=True,
            text=True,
            encoding='utf-8',
            check=True,
            timeout=timeout
        )
    except FileNotFoundError:
        logger.warning("ffprobe not found - video duration probing disabled")
        raise
    except subprocess.CalledProcessError as e:
        logger.error(f"ffprobe failed: {{'path': {str(file_path)!r}, 'stderr': {e.stderr!r}}}")
        raise
    except subprocess.TimeoutExpired:
        logger.error(f"ffprobe timed out: {{'path': {str(file_path)!r}, 'timeout': {timeout}}}")
        raise

    data = json.loads(result.stdout)

    fmt = data.get('format', {})
    if 'duration' in fmt:
        metadata['duration_seconds'] = float(fmt['duration'])

    creation = fmt.get('tags', {}).get(QUICKTIME_CREATIONDATE_KEY)
    if creation:
        parsed = _parse_iso_datetime(creation)
        if parsed is not None:
            metadata['creation_date'] = parsed

    for stream in data.get('streams', []):
        if stream.get('codec_type') != 'video':
            continue
        if 'width' in stream:
            metadata['width'] = int(stream['width'])
        if 'height' in stream:
            metadata['height'] = int(stream['height'])
        if 'r_frame_rate' in stream:
            metadata['frame_rate'] = _parse_frame_rate(stream['r_frame_rate'])
        elif 'avg_frame_rate' in stream:
            metadata['frame_rate'] = _parse_frame_rate(stream['avg_frame_rate'])
        if 'duration_seconds' not in metadata and 'duration' in stream:
            metadata['duration_seconds'] = float(stream['duration'])
        # First video stream only
        break

    return metadata


def probe_video_metadata(file_path: Path, timeout: float = 30.0) -> Dict[str, Any]:
    """
    Like ``extract_video_metadata`` but failures are logged and yield ``{}``.

    An unknown duration is a valid descriptor state, so a single broken
    clip must not abort a scan.
    """
    try:
        return extract_video_metadata(file_path, timeout=timeout)
    except (OSError, subprocess.SubprocessError, ValueError) as e:
        logger.warning(
            f"Video probe failed: {{'path': {str(file_path)!r}, "
            f"'category': {classify_error(e)!r}, 'error': {str(e)!r}}}"
        )
        return {}


def probe_duration(file_path: Path, timeout: float = 30.0) -> Optional[float]:
    """Duration of a video in seconds, or None when it cannot be determined."""
    return probe_video_metadata(file_path, timeout=timeout).get('duration_seconds')


def _parse_iso_datetime(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Could not parse creation date: {value!r}")
        return None


def _parse_frame_rate(frame_rate_str: str) -> Optional[float]:
    """
    Parse frame rate string to float.

    ffprobe returns frame rate as "30000/1001" or "30/1"
    """
    try:
        if '/' in frame_rate_str:
            numerator, denominator = frame_rate_str.split('/')
            den = float(denominator)
            if den == 0:
                return None
            return float(numerator) / den
        return float(frame_rate_str)
    except (ValueError, ZeroDivisionError):
        logger.warning(f"Could not parse frame rate: {frame_rate_str}")
        return None
