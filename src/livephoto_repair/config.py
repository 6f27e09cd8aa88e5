"""Root configuration model."""

from pydantic import BaseModel, Field, ConfigDict

from livephoto_repair.builder.config import BuilderConfig
from livephoto_repair.common import LoggingConfig
from livephoto_repair.matching.config import MatcherConfig
from livephoto_repair.scanner.config import ScannerConfig


class LivePhotoRepairConfig(BaseModel):
    """Root configuration for livephoto-repair."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    builder: BuilderConfig = Field(default_factory=BuilderConfig)
