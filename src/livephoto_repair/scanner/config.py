"""Configuration model for the asset scanner."""

import os
from pydantic import BaseModel, Field, ConfigDict


class ScannerConfig(BaseModel):
    """Scanner metadata extraction configuration."""

    model_config = ConfigDict(extra='forbid')

    use_exiftool: bool = Field(
        default=True,
        description="Read creation timestamps with exiftool (falls back to Pillow EXIF for images when disabled)"
    )
    use_ffprobe: bool = Field(
        default=True,
        description="Probe video durations with ffprobe (durations stay unknown when disabled)"
    )
    exiftool_batch_size: int = Field(
        default=200,
        ge=1,
        description="Number of files passed to a single exiftool invocation"
    )
    tool_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for one exiftool batch or one ffprobe call"
    )
    worker_threads: int = Field(
        default_factory=lambda: os.cpu_count() * 2 if os.cpu_count() else 4,
        ge=1,
        description="Number of threads probing video durations (default: 2 × CPU cores)"
    )
