"""Configuration model for the Live Photo builder."""

from pydantic import BaseModel, Field, ConfigDict, field_validator


class BuilderConfig(BaseModel):
    """Output encoding and naming configuration."""

    model_config = ConfigDict(extra='forbid')

    heic_quality: int = Field(
        default=90,
        ge=1,
        le=100,
        description="heif-enc quality for JPEG to HEIC conversion"
    )
    image_suffix: str = Field(
        default="_live",
        description="Appended to the image base name for both output files"
    )
    tool_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds for one heif-enc, exiftool or ffmpeg call"
    )

    @field_validator('image_suffix')
    @classmethod
    def validate_image_suffix(cls, v: str) -> str:
        """Suffix becomes part of a filename, so it cannot contain separators."""
        if '/' in v or '\\' in v:
            raise ValueError("image_suffix must not contain path separators")
        return v
