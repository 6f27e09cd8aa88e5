"""Common utilities for livephoto_repair packages."""

from .config import ConfigLoader
from .logging import setup_logging, LogContext
from .logging_config import LoggingConfig
from .errors import (
    LivePhotoRepairError, ConfigurationError, FileProcessingError,
    UnsupportedFormatError, ToolNotFoundError, ToolExecutionError, ParseError
)
from .path_utils import normalize_path, normalize_name

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'LogContext',
    'LivePhotoRepairError',
    'ConfigurationError',
    'FileProcessingError',
    'UnsupportedFormatError',
    'ToolNotFoundError',
    'ToolExecutionError',
    'ParseError',
    'normalize_path',
    'normalize_name',
]
