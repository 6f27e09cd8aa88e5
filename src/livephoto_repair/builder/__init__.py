"""Live Photo builder: writes HEIC + MOV bundles sharing a content identifier."""

from .config import BuilderConfig
from .errors import BuildError, ImageWriteError, VideoWriteError
from .image_writer import ImageWriter
from .live_photo_builder import BuildResult, LivePhotoBuilder, new_asset_id
from .naming import unique_output_stem
from .video_writer import VideoWriter

__all__ = [
    'BuilderConfig',
    'BuildError',
    'ImageWriteError',
    'VideoWriteError',
    'ImageWriter',
    'BuildResult',
    'LivePhotoBuilder',
    'new_asset_id',
    'unique_output_stem',
    'VideoWriter',
]
