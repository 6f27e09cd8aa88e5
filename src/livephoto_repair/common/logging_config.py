"""Logging section of the livephoto-repair configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator


class LoggingConfig(BaseModel):
    """Console format and level, plus the optional rotating JSON log file."""

    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level, also settable with --log-level"
    )
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Console format; the log file is always JSON"
    )
    file: Optional[str] = Field(default=None, description="Log file path, unset for console only")
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        description="Size in MB at which the log file is rotated"
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        description="Rotated log files to keep"
    )

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('format', mode='before')
    @classmethod
    def normalize_format(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator('file')
    @classmethod
    def empty_file_means_none(cls, v: Optional[str]) -> Optional[str]:
        """An empty string from TOML or the environment disables the file."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def log_file_path(self) -> Optional[Path]:
        """``file`` with ``~`` expanded, or None."""
        return Path(self.file).expanduser() if self.file else None
