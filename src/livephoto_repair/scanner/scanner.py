"""Asset scanner: discovery plus metadata extraction into descriptors."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from livephoto_repair.matching.models import AssetDescriptor, AssetKind, CaptureTimestamp
from .config import ScannerConfig
from .discovery import discover_assets
from .errors import classify_error
from .metadata import extract_create_date, extract_timestamps, probe_duration, probe_video_metadata

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Descriptors ready for matching.

    Attributes:
        images: Image descriptors in path order
        videos: Video descriptors in path order
        skipped: Files that are neither image nor video
    """
    images: List[AssetDescriptor] = field(default_factory=list)
    videos: List[AssetDescriptor] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)


class AssetScanner:
    """Turns an input directory into image and video descriptors.

    Timestamps come from exiftool in batches. When exiftool is disabled,
    images fall back to Pillow EXIF and videos to the QuickTime creation
    date ffprobe reports. Durations are probed with ffprobe in a thread pool.
    """

    def __init__(self, config: Optional[ScannerConfig] = None):
        self.config = config or ScannerConfig()

    def scan(self, root: Path) -> ScanResult:
        """Discover and describe every image and video below ``root``.

        Extraction failures are logged; affected descriptors simply lack the
        optional field.
        """
        discovery = discover_assets(root)

        timestamps = self._read_timestamps(discovery.images, discovery.videos)
        video_info = self._probe_videos(discovery.videos)

        result = ScanResult(skipped=discovery.skipped)

        for path in discovery.images:
            result.images.append(AssetDescriptor.from_path(
                path,
                AssetKind.IMAGE,
                timestamp=timestamps.get(path),
            ))

        for path in discovery.videos:
            duration, creation_date = video_info.get(path, (None, None))
            timestamp = timestamps.get(path)
            if timestamp is None and creation_date is not None:
                timestamp = CaptureTimestamp.quicktime(creation_date)
            result.videos.append(AssetDescriptor.from_path(
                path,
                AssetKind.VIDEO,
                duration=duration,
                timestamp=timestamp,
            ))

        logger.info(
            f"Scan complete: {{'images': {len(result.images)}, 'videos': {len(result.videos)}, "
            f"'with_timestamp': {len(timestamps)}, 'skipped': {len(result.skipped)}}}"
        )
        return result

    def _read_timestamps(self, images: List[Path], videos: List[Path]) -> Dict[Path, CaptureTimestamp]:
        if self.config.use_exiftool:
            files = [(p, AssetKind.IMAGE) for p in images] + [(p, AssetKind.VIDEO) for p in videos]
            try:
                return extract_timestamps(
                    files,
                    batch_size=self.config.exiftool_batch_size,
                    timeout=self.config.tool_timeout,
                )
            except FileNotFoundError as e:
                logger.error(
                    f"Timestamp extraction unavailable: {{'category': {classify_error(e)!r}, "
                    f"'error': {str(e)!r}}}"
                )
                return {}

        timestamps: Dict[Path, CaptureTimestamp] = {}
        with ThreadPoolExecutor(max_workers=self.config.worker_threads) as executor:
            for path, value in zip(images, executor.map(extract_create_date, images)):
                if value is not None:
                    timestamps[path] = CaptureTimestamp.exif(value)
        return timestamps

    def _probe_videos(self, videos: List[Path]) -> Dict[Path, Tuple[Optional[float], Optional[datetime]]]:
        if not self.config.use_ffprobe or not videos:
            return {}

        logger.info(f"Probing videos: {{'videos': {len(videos)}, 'workers': {self.config.worker_threads}}}")

        with ThreadPoolExecutor(max_workers=self.config.worker_threads) as executor:
            if self.config.use_exiftool:
                durations = executor.map(self._duration, videos)
                return {path: (duration, None) for path, duration in zip(videos, durations)}

            infos = executor.map(self._video_metadata, videos)
            return {
                path: (info.get('duration_seconds'), info.get('creation_date'))
                for path, info in zip(videos, infos)
            }

    def _duration(self, path: Path) -> Optional[float]:
        return probe_duration(path, timeout=self.config.tool_timeout)

    def _video_metadata(self, path: Path) -> Dict:
        return probe_video_metadata(path, timeout=self.config.tool_timeout)
