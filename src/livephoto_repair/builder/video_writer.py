"""Video half of a Live Photo bundle."""

import logging
from pathlib import Path

from livephoto_repair.common import LivePhotoRepairError
from .errors import VideoWriteError
from .process import run_tool

logger = logging.getLogger(__name__)

CONTENT_IDENTIFIER_KEY = 'com.apple.quicktime.content.identifier'
STILL_IMAGE_TIME_KEY = 'com.apple.quicktime.still-image-time'


class VideoWriter:
    """Re-exports a clip as QuickTime with the Live Photo metadata keys.

    Streams are copied, not re-encoded. The original still frame time is
    unrecoverable, so still-image-time is written as 0.
    """

    def __init__(self, timeout: float = 120.0):
        self.timeout = timeout

    def build_command(self, src: Path, dst: Path, asset_id: str) -> list:
        return [
            'ffmpeg',
            '-y',
            '-loglevel', 'error',
            '-i', str(src),
            '-map', '0',
            '-c', 'copy',
            '-map_metadata', '0',
            '-movflags', 'use_metadata_tags',
            '-metadata', f'{CONTENT_IDENTIFIER_KEY}={asset_id}',
            '-metadata', f'{STILL_IMAGE_TIME_KEY}=0',
            '-f', 'mov',
            str(dst),
        ]

    def write(self, src: Path, dst: Path, asset_id: str) -> Path:
        """
        Write ``src`` to ``dst`` as a .mov tagged with ``asset_id``.

        Raises:
            VideoWriteError: If ffmpeg is missing or fails; any partial
                ``dst`` is removed first
        """
        try:
            run_tool(self.build_command(src, dst, asset_id), timeout=self.timeout)
        except LivePhotoRepairError as e:
            # ffmpeg may have written part of the file before failing
            dst.unlink(missing_ok=True)
            raise VideoWriteError(
                f"Failed to write video {src.name}: {e}",
                src=str(src),
                dst=str(dst),
                asset_id=asset_id,
            ) from e

        logger.debug(f"Video written: {{'src': {str(src)!r}, 'dst': {str(dst)!r}, 'asset_id': {asset_id!r}}}")
        return dst
