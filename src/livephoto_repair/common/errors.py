"""Base error definitions for livephoto_repair packages."""

from typing import Any, Dict


class LivePhotoRepairError(Exception):
    """Base exception for all livephoto_repair errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(LivePhotoRepairError):
    """Configuration is invalid or missing."""
    pass


class FileProcessingError(LivePhotoRepairError):
    """Base exception for file processing errors."""
    pass


class UnsupportedFormatError(FileProcessingError):
    """File format is not supported."""
    pass


class ToolNotFoundError(FileProcessingError):
    """Required external tool is not available."""
    pass


class ToolExecutionError(FileProcessingError):
    """External tool ran but did not succeed."""
    pass


class ParseError(FileProcessingError):
    """Error parsing file metadata."""
    pass
