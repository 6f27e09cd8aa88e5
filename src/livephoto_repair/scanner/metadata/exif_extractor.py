"""EXIF CreateDate extraction using Pillow.

Used for images when exiftool is disabled. Pillow reads JPEG and PNG
natively; HEIC needs a Pillow plugin, so HEIC files without one simply
yield no timestamp.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .datetime_parser import parse_exif_datetime

logger = logging.getLogger(__name__)

EXIF_IFD_POINTER = 0x8769
DATETIME_DIGITIZED = 0x9004  # exiftool calls this CreateDate
OFFSET_TIME_DIGITIZED = 0x9012


def extract_create_date(file_path: Path) -> Optional[datetime]:
    """
    Read EXIF CreateDate (DateTimeDigitized) from an image.

    When OffsetTimeDigitized is present the result is timezone aware.

    Args:
        file_path: Path to image file

    Returns:
        datetime or None if the tag is absent or the file cannot be read
    """
    try:
        with Image.open(file_path) as img:
            exif_ifd = img.getexif().get_ifd(EXIF_IFD_POINTER)
    except (UnidentifiedImageError, OSError) as e:
        logger.debug(f"No EXIF available: {{'path': {str(file_path)!r}, 'error': {str(e)!r}}}")
        return None

    raw = exif_ifd.get(DATETIME_DIGITIZED)
    if raw is None:
        return None

    offset = exif_ifd.get(OFFSET_TIME_DIGITIZED)
    if isinstance(raw, str) and isinstance(offset, str) and offset.strip():
        raw = f"{raw.strip()}{offset.strip()}"

    value = parse_exif_datetime(raw)
    if value is None:
        logger.warning(f"Malformed EXIF CreateDate: {{'path': {str(file_path)!r}, 'value': {raw!r}}}")
    return value
