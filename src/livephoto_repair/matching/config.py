"""Configuration model for the pairing engine."""

from pydantic import BaseModel, Field, ConfigDict


class MatcherConfig(BaseModel):
    """Pairing thresholds."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    max_video_duration: float = Field(
        default=4.0,
        ge=0,
        description="Longest companion video accepted, in seconds (unknown duration counts as 0)"
    )
    max_time_delta: float = Field(
        default=4.0,
        ge=0,
        description="Largest allowed gap between image and video creation times, in seconds"
    )
    max_numeric_delta: int = Field(
        default=1,
        ge=0,
        description="Largest allowed distance between sequential file numbers (IMG_0019 vs IMG_0020)"
    )
