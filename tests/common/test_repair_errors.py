"""Tests for the error hierarchy."""

import pytest

from livephoto_repair.common.errors import (
    ConfigurationError,
    FileProcessingError,
    LivePhotoRepairError,
    ParseError,
    ToolExecutionError,
    ToolNotFoundError,
    UnsupportedFormatError,
)
from livephoto_repair.builder.errors import BuildError, ImageWriteError, VideoWriteError
from livephoto_repair.scanner.errors import MetadataExtractionError, ScannerError


class TestErrorHierarchy:
    """All project errors share one base."""

    @pytest.mark.parametrize("error_class", [
        ConfigurationError,
        FileProcessingError,
        UnsupportedFormatError,
        ToolNotFoundError,
        ToolExecutionError,
        ParseError,
        ScannerError,
        MetadataExtractionError,
        BuildError,
        ImageWriteError,
        VideoWriteError,
    ])
    def test_subclass_of_base(self, error_class):
        """Every error can be caught as LivePhotoRepairError."""
        assert issubclass(error_class, LivePhotoRepairError)

    def test_file_errors(self):
        """Tool and format errors are file processing errors."""
        for error_class in (UnsupportedFormatError, ToolNotFoundError, ToolExecutionError, ParseError):
            assert issubclass(error_class, FileProcessingError)

    def test_build_errors(self):
        """Writer errors are build errors."""
        assert issubclass(ImageWriteError, BuildError)
        assert issubclass(VideoWriteError, BuildError)


class TestErrorContext:
    """Structured context carried by errors."""

    def test_message_and_context(self):
        """Keyword arguments become context."""
        error = ToolNotFoundError("exiftool missing", tool="exiftool")
        assert error.message == "exiftool missing"
        assert error.context == {"tool": "exiftool"}
        assert str(error) == "exiftool missing"

    def test_empty_context(self):
        """Context defaults to an empty dict."""
        assert LivePhotoRepairError("boom").context == {}
