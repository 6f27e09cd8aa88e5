"""Error classes for the asset scanner."""

import subprocess

from livephoto_repair.common import (
    LivePhotoRepairError,
    ParseError,
    ToolExecutionError,
    ToolNotFoundError,
)


class ScannerError(LivePhotoRepairError):
    """Base error for scanner operations."""
    pass


class MetadataExtractionError(ScannerError):
    """Timestamp or duration could not be extracted from a file."""
    pass


def classify_error(exception: Exception) -> str:
    """
    Classify an exception into an error category for log records.

    Args:
        exception: The exception to classify

    Returns:
        Error category string: 'permission', 'tool_missing', 'timeout',
        'tool_failed', 'parse', 'io' or 'unknown'
    """
    if isinstance(exception, ToolNotFoundError):
        return 'tool_missing'
    elif isinstance(exception, (ToolExecutionError, MetadataExtractionError)):
        return 'tool_failed'
    elif isinstance(exception, ParseError):
        return 'parse'
    elif isinstance(exception, subprocess.TimeoutExpired):
        return 'timeout'
    elif isinstance(exception, subprocess.CalledProcessError):
        return 'tool_failed'
    elif isinstance(exception, PermissionError):
        return 'permission'
    elif isinstance(exception, FileNotFoundError):
        # subprocess raises FileNotFoundError when the executable is absent
        return 'tool_missing' if exception.filename in ('exiftool', 'ffprobe') else 'io'
    elif isinstance(exception, OSError):
        return 'io'
    elif isinstance(exception, (ValueError, KeyError, TypeError)):
        return 'parse'
    else:
        return 'unknown'
