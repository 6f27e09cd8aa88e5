"""Multi-pass Live Photo pairing engine.

Pairs still images with companion videos inside each folder using a fixed
sequence of increasingly loose rules:

- P1   exact base name                                   -> tier 1
- P2   sequential number, same prefix (IMG_0010/0011)    -> tier 2
- P2.5 equal after stripping "(1)", "+1", "-1" suffixes  -> tier 3
- P3   creation time only, separate sweep                -> tier 4

P1, P2 and P2.5 are tried in that order for one image before moving on to
the next image. P3 runs only after every image of the folder went through
the name passes. Every name pass also requires the video to be short enough
and, when both sides carry a timestamp, the timestamps to be close enough.

Matching is greedy: the first qualifying video in input order wins and is
never reconsidered. This is not an optimal assignment.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .config import MatcherConfig
from .filename_heuristics import normalize_base, parse_numeric_suffix
from .models import AssetDescriptor, AssetKind, MatchPair, MatchTier
from .trace import MatchSink

logger = logging.getLogger(__name__)


@dataclass
class FolderGroup:
    """Images and videos that share a parent directory, in input order."""
    folder: str
    images: List[AssetDescriptor] = field(default_factory=list)
    videos: List[AssetDescriptor] = field(default_factory=list)


def group_by_folder(
    images: Iterable[AssetDescriptor],
    videos: Iterable[AssetDescriptor],
) -> List[FolderGroup]:
    """
    Partition descriptors by folder.

    Folders appear in first-seen order (images first, then videos) and each
    group keeps input order. Descriptors are sorted into images/videos by
    their ``kind``, not by the sequence they arrived in.

    Args:
        images: Image descriptors
        videos: Video descriptors

    Returns:
        List of FolderGroup in deterministic order
    """
    groups: Dict[str, FolderGroup] = {}

    for descriptor in [*images, *videos]:
        group = groups.get(descriptor.folder)
        if group is None:
            group = groups[descriptor.folder] = FolderGroup(folder=descriptor.folder)
        if descriptor.kind is AssetKind.IMAGE:
            group.images.append(descriptor)
        else:
            group.videos.append(descriptor)

    return list(groups.values())


class _FolderState:
    """Consumption tracking for one folder group."""

    def __init__(self, group: FolderGroup, sink: Optional[MatchSink]) -> None:
        self.group = group
        self.sink = sink
        self.consumed_images: Set[Path] = set()
        self.consumed_videos: Set[Path] = set()
        self.pairs: List[MatchPair] = []
        self.numeric: Dict[Path, Optional[Tuple[str, int]]] = {
            video.path: parse_numeric_suffix(video.base_name) for video in group.videos
        }
        self.normalized: Dict[Path, str] = {
            video.path: normalize_base(video.base_name) for video in group.videos
        }

    def is_consumed(self, image: AssetDescriptor) -> bool:
        return image.path in self.consumed_images

    def available_videos(self) -> Iterator[AssetDescriptor]:
        for video in self.group.videos:
            if video.path not in self.consumed_videos:
                yield video

    def accept(self, pair: MatchPair) -> None:
        self.consumed_images.add(pair.image.path)
        self.consumed_videos.add(pair.video.path)
        self.pairs.append(pair)
        logger.debug(
            f"Pair accepted: {{'tier': {int(pair.tier)}, 'image': {pair.image.name!r}, "
            f"'video': {pair.video.name!r}, 'time_delta': {pair.time_delta}}}"
        )
        if self.sink is not None:
            self.sink.record(pair)


class PairMatcher:
    """Matches images and videos into Live Photo pairs.

    Args:
        config: Thresholds, defaults to MatcherConfig()
        trace: Optional sink notified of each accepted pair
    """

    def __init__(self, config: Optional[MatcherConfig] = None, trace: Optional[MatchSink] = None) -> None:
        self.config = config or MatcherConfig()
        self.trace = trace

    def match(
        self,
        images: Sequence[AssetDescriptor],
        videos: Sequence[AssetDescriptor],
    ) -> List[MatchPair]:
        """
        Pair images with videos, folder by folder.

        Args:
            images: Image descriptors in scan order
            videos: Video descriptors in scan order

        Returns:
            Pairs grouped by folder processing order; within a folder, name
            pass pairs first (image order), then timestamp-only pairs
        """
        groups = group_by_folder(images, videos)
        logger.info(
            f"Matching Live Photo pairs: {{'images': {len(images)}, 'videos': {len(videos)}, "
            f"'folders': {len(groups)}}}"
        )

        pairs: List[MatchPair] = []
        for group in groups:
            pairs.extend(self.match_folder(group))

        tiers = {tier.pass_label: sum(1 for p in pairs if p.tier is tier) for tier in MatchTier}
        logger.info(f"Matching complete: {{'pairs': {len(pairs)}, 'by_pass': {tiers}}}")
        return pairs

    def match_folder(self, group: FolderGroup) -> List[MatchPair]:
        """Run all passes over a single folder group."""
        if not group.images or not group.videos:
            logger.debug(
                f"Folder skipped: {{'folder': {group.folder!r}, 'images': {len(group.images)}, "
                f"'videos': {len(group.videos)}}}"
            )
            return []

        state = _FolderState(group, self.trace)
        name_passes: List[Callable[[AssetDescriptor, _FolderState], Optional[MatchPair]]] = [
            self._match_exact_name,
            self._match_sequential_name,
            self._match_normalized_name,
        ]

        for image in group.images:
            if state.is_consumed(image):
                continue
            for name_pass in name_passes:
                pair = name_pass(image, state)
                if pair is not None:
                    state.accept(pair)
                    break

        name_matches = len(state.pairs)

        for image in group.images:
            if state.is_consumed(image):
                continue
            pair = self._match_timestamp_only(image, state)
            if pair is not None:
                state.accept(pair)

        logger.debug(
            f"Folder matched: {{'folder': {group.folder!r}, 'name_pairs': {name_matches}, "
            f"'timestamp_pairs': {len(state.pairs) - name_matches}, "
            f"'unmatched_images': {len(group.images) - len(state.consumed_images)}, "
            f"'unmatched_videos': {len(group.videos) - len(state.consumed_videos)}}}"
        )
        return state.pairs

    # Guards

    def _duration_ok(self, video: AssetDescriptor) -> bool:
        return video.effective_duration <= self.config.max_video_duration

    def _time_delta(self, image: AssetDescriptor, video: AssetDescriptor) -> Optional[float]:
        if image.timestamp is None or video.timestamp is None:
            return None
        return image.timestamp.seconds_between(video.timestamp)

    def _time_ok(self, delta: Optional[float]) -> bool:
        # A missing timestamp on either side skips the check
        return delta is None or delta <= self.config.max_time_delta

    # Passes

    def _match_exact_name(self, image: AssetDescriptor, state: _FolderState) -> Optional[MatchPair]:
        """P1: identical base name."""
        for video in state.available_videos():
            if video.base_name != image.base_name:
                continue
            if not self._duration_ok(video):
                continue
            delta = self._time_delta(image, video)
            if not self._time_ok(delta):
                continue
            return MatchPair(image, video, MatchTier.EXACT_NAME, time_delta=delta)
        return None

    def _match_sequential_name(self, image: AssetDescriptor, state: _FolderState) -> Optional[MatchPair]:
        """P2: same prefix, trailing numbers at most max_numeric_delta apart."""
        parsed = parse_numeric_suffix(image.base_name)
        if parsed is None:
            return None
        image_prefix, image_number = parsed

        for video in state.available_videos():
            video_parsed = state.numeric[video.path]
            if video_parsed is None:
                continue
            video_prefix, video_number = video_parsed
            if video_prefix != image_prefix:
                continue
            numeric_delta = abs(image_number - video_number)
            if not 0 < numeric_delta <= self.config.max_numeric_delta:
                continue
            if not self._duration_ok(video):
                continue
            delta = self._time_delta(image, video)
            if not self._time_ok(delta):
                continue
            return MatchPair(
                image, video, MatchTier.SEQUENTIAL_NAME,
                time_delta=delta, numeric_delta=numeric_delta,
            )
        return None

    def _match_normalized_name(self, image: AssetDescriptor, state: _FolderState) -> Optional[MatchPair]:
        """P2.5: equal once duplicate-renaming suffixes are stripped from both sides."""
        normalized = normalize_base(image.base_name)

        for video in state.available_videos():
            if state.normalized[video.path] != normalized:
                continue
            if not self._duration_ok(video):
                continue
            delta = self._time_delta(image, video)
            if not self._time_ok(delta):
                continue
            return MatchPair(image, video, MatchTier.NORMALIZED_NAME, time_delta=delta)
        return None

    def _match_timestamp_only(self, image: AssetDescriptor, state: _FolderState) -> Optional[MatchPair]:
        """P3: creation times within max_time_delta, names ignored."""
        if image.timestamp is None:
            return None

        for video in state.available_videos():
            if video.timestamp is None:
                continue
            if not self._duration_ok(video):
                continue
            delta = self._time_delta(image, video)
            if delta > self.config.max_time_delta:
                continue
            return MatchPair(image, video, MatchTier.TIMESTAMP_ONLY, time_delta=delta)
        return None


def match_pairs(
    images: Sequence[AssetDescriptor],
    videos: Sequence[AssetDescriptor],
    config: Optional[MatcherConfig] = None,
    trace: Optional[MatchSink] = None,
) -> List[MatchPair]:
    """Convenience wrapper around ``PairMatcher(config, trace).match()``."""
    return PairMatcher(config, trace).match(images, videos)
