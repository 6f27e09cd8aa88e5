"""Assembles a Live Photo bundle from a matched pair."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from livephoto_repair.matching.models import MatchPair
from .config import BuilderConfig
from .errors import VideoWriteError
from .image_writer import ImageWriter
from .naming import unique_output_stem
from .video_writer import VideoWriter

logger = logging.getLogger(__name__)

IMAGE_EXTENSION = '.heic'
VIDEO_EXTENSION = '.mov'


@dataclass(frozen=True)
class BuildResult:
    """Files written for one pair."""
    pair: MatchPair
    asset_id: str
    image_path: Path
    video_path: Path


def new_asset_id() -> str:
    """Fresh Live Photo identifier in the uppercase form Apple devices write."""
    return str(uuid.uuid4()).upper()


class LivePhotoBuilder:
    """Writes the HEIC + MOV pair sharing one content identifier."""

    def __init__(
        self,
        config: Optional[BuilderConfig] = None,
        image_writer: Optional[ImageWriter] = None,
        video_writer: Optional[VideoWriter] = None,
    ):
        self.config = config or BuilderConfig()
        self.image_writer = image_writer or ImageWriter(
            quality=self.config.heic_quality,
            timeout=self.config.tool_timeout,
        )
        self.video_writer = video_writer or VideoWriter(timeout=self.config.tool_timeout)

    def output_stem(self, pair: MatchPair, output_dir: Path) -> str:
        """Collision-free stem for ``pair`` inside ``output_dir``."""
        return unique_output_stem(
            output_dir,
            f"{pair.image.base_name}{self.config.image_suffix}",
            (IMAGE_EXTENSION, VIDEO_EXTENSION),
        )

    def build(self, pair: MatchPair, output_dir: Path) -> BuildResult:
        """
        Write both halves of the Live Photo for ``pair`` into ``output_dir``.

        If the video fails after the image was written, both output files
        are removed so no half bundle is left behind.

        Raises:
            UnsupportedFormatError: If the image is neither JPEG nor HEIC
            ImageWriteError: If the image cannot be written
            VideoWriteError: If the video cannot be written
        """
        asset_id = new_asset_id()
        stem = self.output_stem(pair, output_dir)
        image_out = output_dir / f"{stem}{IMAGE_EXTENSION}"
        video_out = output_dir / f"{stem}{VIDEO_EXTENSION}"

        self.image_writer.write(pair.image.path, image_out, asset_id)
        try:
            self.video_writer.write(pair.video.path, video_out, asset_id)
        except VideoWriteError:
            image_out.unlink(missing_ok=True)
            video_out.unlink(missing_ok=True)
            raise

        logger.info(
            f"Live Photo built: {{'image': {pair.image.name!r}, 'video': {pair.video.name!r}, "
            f"'tier': {pair.tier.pass_label!r}, 'asset_id': {asset_id!r}, 'output': {stem!r}}}"
        )
        return BuildResult(pair=pair, asset_id=asset_id, image_path=image_out, video_path=video_out)
