"""Metadata extraction modules."""

from .datetime_parser import parse_exif_datetime
from .exif_extractor import extract_create_date
from .exiftool_extractor import extract_timestamps, run_exiftool_batch
from .video_extractor import extract_video_metadata, probe_duration, probe_video_metadata

__all__ = [
    'parse_exif_datetime',
    'extract_create_date',
    'extract_timestamps',
    'run_exiftool_batch',
    'extract_video_metadata',
    'probe_duration',
    'probe_video_metadata',
]
