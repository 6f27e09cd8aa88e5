"""File discovery for Live Photo repair.

Walks an input tree and sorts every file into still images, videos, and
everything else. Content detection is done by magic bytes; see
``mime_detector.classify_asset``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from livephoto_repair.matching.models import AssetKind
from .mime_detector import classify_asset

logger = logging.getLogger(__name__)

# System files to exclude (cross-platform)
SYSTEM_FILES = {
    'thumbs.db',      # Windows thumbnail cache
    'desktop.ini',    # Windows folder settings
    '.ds_store',      # macOS folder metadata
    'icon\r',         # macOS custom folder icon (has literal carriage return!)
}

# Temporary file extensions to exclude
TEMP_EXTENSIONS = {'.tmp', '.temp', '.cache', '.bak', '.swp', '.part'}


@dataclass
class DiscoveryResult:
    """Result of file discovery.

    Attributes:
        images: Still images, sorted by path
        videos: Video clips, sorted by path
        skipped: Hidden, system, temporary and unrecognised files, sorted by path
    """
    images: List[Path] = field(default_factory=list)
    videos: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.images) + len(self.videos) + len(self.skipped)


def is_hidden(path: Path, root: Path) -> bool:
    """
    True if ``path`` or any directory between it and ``root`` starts with '.'.

    Args:
        path: File inside ``root``
        root: Scan root (its own name is not considered)
    """
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = (path.name,)
    return any(part.startswith('.') for part in parts)


def should_scan_file(path: Path) -> bool:
    """
    Exclude obvious system and temporary files before content sniffing.

    This does NOT check file content; classification happens afterwards.
    """
    if path.name.lower() in SYSTEM_FILES:
        return False
    if path.suffix.lower() in TEMP_EXTENSIONS:
        return False
    return True


def discover_assets(root: Path) -> DiscoveryResult:
    """Discover all images and videos below ``root``.

    Args:
        root: Directory to scan

    Returns:
        DiscoveryResult with path lists in deterministic (sorted) order

    Raises:
        NotADirectoryError: If ``root`` is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    result = DiscoveryResult()

    for file_path in sorted(root.rglob('*')):
        if not file_path.is_file():
            continue

        if is_hidden(file_path, root) or not should_scan_file(file_path):
            logger.debug(f"Skipping file: {{'path': {str(file_path)!r}, 'reason': 'hidden_or_system'}}")
            result.skipped.append(file_path)
            continue

        kind = classify_asset(file_path)
        if kind is AssetKind.IMAGE:
            result.images.append(file_path)
        elif kind is AssetKind.VIDEO:
            result.videos.append(file_path)
        else:
            logger.debug(f"Skipping file: {{'path': {str(file_path)!r}, 'reason': 'not_media'}}")
            result.skipped.append(file_path)

    logger.info(
        f"Discovery complete: {{'root': {str(root)!r}, 'images': {len(result.images)}, "
        f"'videos': {len(result.videos)}, 'skipped': {len(result.skipped)}}}"
    )
    return result
