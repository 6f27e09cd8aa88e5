"""Still image half of a Live Photo bundle."""

import logging
import shutil
from pathlib import Path

from livephoto_repair.common import LivePhotoRepairError, UnsupportedFormatError
from .errors import ImageWriteError
from .process import run_tool

logger = logging.getLogger(__name__)

JPEG_EXTENSIONS = {'.jpg', '.jpeg'}
HEIC_EXTENSIONS = {'.heic', '.heif'}


class ImageWriter:
    """Writes a HEIC carrying the Live Photo asset identifier.

    JPEG sources are re-encoded with heif-enc, HEIC sources are copied. The
    identifier goes into the Apple MakerNote ContentIdentifier tag, which is
    what Photos compares against the video's content.identifier.
    """

    def __init__(self, quality: int = 90, timeout: float = 120.0):
        self.quality = quality
        self.timeout = timeout

    def write(self, src: Path, dst: Path, asset_id: str) -> Path:
        """
        Write ``src`` to ``dst`` as HEIC tagged with ``asset_id``.

        Raises:
            UnsupportedFormatError: If ``src`` is neither JPEG nor HEIC
            ImageWriteError: If conversion, copy or tagging fails; ``dst`` is
                removed first
        """
        extension = src.suffix.lower()
        if extension not in JPEG_EXTENSIONS | HEIC_EXTENSIONS:
            raise UnsupportedFormatError(
                f"Unsupported image type: {extension or '(none)'}",
                path=str(src),
            )

        try:
            if extension in JPEG_EXTENSIONS:
                self._convert_to_heic(src, dst)
            else:
                shutil.copyfile(src, dst)
            self._inject_identifier(dst, asset_id)
        except (LivePhotoRepairError, OSError) as e:
            # An untagged HEIC would take the stem on the next run
            dst.unlink(missing_ok=True)
            raise ImageWriteError(
                f"Failed to write image {src.name}: {e}",
                src=str(src),
                dst=str(dst),
                asset_id=asset_id,
            ) from e

        logger.debug(f"Image written: {{'src': {str(src)!r}, 'dst': {str(dst)!r}, 'asset_id': {asset_id!r}}}")
        return dst

    def _convert_to_heic(self, src: Path, dst: Path) -> None:
        run_tool(
            ['heif-enc', '-q', str(self.quality), str(src), '-o', str(dst)],
            timeout=self.timeout,
        )

    def _inject_identifier(self, path: Path, asset_id: str) -> None:
        run_tool(
            [
                'exiftool',
                '-overwrite_original',
                f'-Apple:ContentIdentifier={asset_id}',
                str(path),
            ],
            timeout=self.timeout,
        )
