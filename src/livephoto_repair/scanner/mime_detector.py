"""Asset classification using the filetype library (pure Python, cross-platform)."""

import logging
from pathlib import Path
from typing import Optional

import filetype

from livephoto_repair.matching.models import AssetKind

logger = logging.getLogger(__name__)

UNKNOWN_MIME_TYPE = 'application/octet-stream'

# Extension fallback for files whose magic bytes filetype does not recognise
IMAGE_EXTENSIONS = {'.heic', '.heif', '.jpg', '.jpeg', '.png'}
VIDEO_EXTENSIONS = {'.mov', '.mp4'}


def detect_mime_type(file_path: Path) -> str:
    """
    Detect MIME type of a file by reading its magic bytes.

    Args:
        file_path: Path to the file

    Returns:
        MIME type string (e.g., 'image/jpeg', 'video/quicktime')
        Returns 'application/octet-stream' if type cannot be determined

    Raises:
        OSError: If file cannot be read
    """
    kind = filetype.guess(str(file_path))
    if kind is not None:
        return kind.mime
    return UNKNOWN_MIME_TYPE


def is_image_mime_type(mime_type: str) -> bool:
    """Check if a MIME type represents an image."""
    return mime_type.startswith('image/')


def is_video_mime_type(mime_type: str) -> bool:
    """Check if a MIME type represents a video."""
    return mime_type.startswith('video/')


def classify_asset(file_path: Path) -> Optional[AssetKind]:
    """
    Decide whether a file is a still image, a video, or neither.

    Magic bytes win; the extension is consulted only when the content is not
    recognised or cannot be read.

    Args:
        file_path: Path to the file

    Returns:
        AssetKind.IMAGE, AssetKind.VIDEO, or None for anything else
    """
    try:
        mime_type = detect_mime_type(file_path)
    except OSError as e:
        logger.warning(f"Cannot read file for type detection: {{'path': {str(file_path)!r}, 'error': {str(e)!r}}}")
        mime_type = UNKNOWN_MIME_TYPE

    if is_image_mime_type(mime_type):
        return AssetKind.IMAGE
    if is_video_mime_type(mime_type):
        return AssetKind.VIDEO

    extension = file_path.suffix.lower()
    if mime_type == UNKNOWN_MIME_TYPE:
        if extension in IMAGE_EXTENSIONS:
            return AssetKind.IMAGE
        if extension in VIDEO_EXTENSIONS:
            return AssetKind.VIDEO

    return None
