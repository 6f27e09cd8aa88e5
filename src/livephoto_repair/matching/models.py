"""Asset descriptor and match pair models.

Descriptors are produced once by the scanner and are read-only inputs to the
pairing engine. Match pairs are produced by the engine and consumed once by
the builder.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path
from typing import Optional

from livephoto_repair.common.path_utils import normalize_name, normalize_path


class AssetKind(str, Enum):
    """Type of asset: image or video."""
    IMAGE = "image"
    VIDEO = "video"


class TimestampSource(str, Enum):
    """Where a capture timestamp was read from.

    Each source belongs to exactly one asset kind.
    """
    EXIF_CREATE_DATE = "exif_create_date"
    QUICKTIME_CREATION_DATE = "quicktime_creation_date"

    @property
    def kind(self) -> AssetKind:
        if self is TimestampSource.EXIF_CREATE_DATE:
            return AssetKind.IMAGE
        return AssetKind.VIDEO


@dataclass(frozen=True)
class CaptureTimestamp:
    """A creation time tagged with the metadata field it came from."""
    source: TimestampSource
    value: datetime

    def __post_init__(self) -> None:
        # Accept the plain string value, e.g. from a serialized descriptor
        object.__setattr__(self, 'source', TimestampSource(self.source))

    def seconds_between(self, other: "CaptureTimestamp") -> float:
        """Absolute difference in seconds.

        Aware/aware pairs compare real instants. If either side is naive both
        are compared as wall-clock time, since EXIF CreateDate carries no
        offset while QuickTime CreationDate is local time plus offset.
        """
        a, b = self.value, other.value
        if a.tzinfo is None or b.tzinfo is None:
            a = a.replace(tzinfo=None)
            b = b.replace(tzinfo=None)
        return abs((a - b).total_seconds())

    @classmethod
    def exif(cls, value: datetime) -> "CaptureTimestamp":
        return cls(TimestampSource.EXIF_CREATE_DATE, value)

    @classmethod
    def quicktime(cls, value: datetime) -> "CaptureTimestamp":
        return cls(TimestampSource.QUICKTIME_CREATION_DATE, value)


@dataclass(frozen=True)
class AssetDescriptor:
    """A scanned image or video file.

    Attributes:
        path: Filesystem identity; two descriptors with the same path are the same asset
        kind: Image or video
        folder: Normalized parent directory, the scope for matching
        base_name: Filename without extension (NFC)
        duration: Video duration in seconds, None when unknown
        timestamp: Capture time, its source must fit ``kind``
    """
    path: Path
    kind: AssetKind
    folder: str
    base_name: str
    duration: Optional[float] = None
    timestamp: Optional[CaptureTimestamp] = None

    def __post_init__(self) -> None:
        # "image" and AssetKind.IMAGE must behave the same in identity checks
        object.__setattr__(self, 'kind', AssetKind(self.kind))
        if self.timestamp is not None and self.timestamp.source.kind is not self.kind:
            raise ValueError(
                f"{self.kind.value} descriptor cannot carry a "
                f"{self.timestamp.source.value} timestamp: {self.path}"
            )

    @classmethod
    def from_path(
        cls,
        path: Path,
        kind: AssetKind,
        duration: Optional[float] = None,
        timestamp: Optional[CaptureTimestamp] = None,
    ) -> "AssetDescriptor":
        """Build a descriptor, deriving folder and base name from ``path``."""
        path = Path(path)
        kind = AssetKind(kind)
        return cls(
            path=path,
            kind=kind,
            folder=normalize_path(path.parent),
            base_name=normalize_name(path.stem),
            duration=duration if kind is AssetKind.VIDEO else None,
            timestamp=timestamp,
        )

    @property
    def is_image(self) -> bool:
        return self.kind is AssetKind.IMAGE

    @property
    def is_video(self) -> bool:
        return self.kind is AssetKind.VIDEO

    @property
    def primary_timestamp(self) -> Optional[datetime]:
        """Image EXIF CreateDate, never set on videos."""
        if self.timestamp and self.timestamp.source is TimestampSource.EXIF_CREATE_DATE:
            return self.timestamp.value
        return None

    @property
    def secondary_timestamp(self) -> Optional[datetime]:
        """Video QuickTime CreationDate, never set on images."""
        if self.timestamp and self.timestamp.source is TimestampSource.QUICKTIME_CREATION_DATE:
            return self.timestamp.value
        return None

    @property
    def effective_duration(self) -> float:
        """Duration used for threshold checks; unknown counts as 0."""
        return self.duration or 0.0

    @property
    def name(self) -> str:
        return self.path.name


class MatchTier(IntEnum):
    """Confidence rank of a match, lower is better."""
    EXACT_NAME = 1
    SEQUENTIAL_NAME = 2
    NORMALIZED_NAME = 3
    TIMESTAMP_ONLY = 4

    @property
    def pass_label(self) -> str:
        """Name of the pass that produces this tier."""
        return _PASS_LABELS[self]


_PASS_LABELS = {
    MatchTier.EXACT_NAME: "P1",
    MatchTier.SEQUENTIAL_NAME: "P2",
    MatchTier.NORMALIZED_NAME: "P2.5",
    MatchTier.TIMESTAMP_ONLY: "P3",
}


@dataclass(frozen=True)
class MatchPair:
    """A matched image/video pair for a Live Photo.

    ``time_delta`` and ``numeric_delta`` explain the decision and are not part
    of equality.
    """
    image: AssetDescriptor
    video: AssetDescriptor
    tier: MatchTier
    time_delta: Optional[float] = field(default=None, compare=False)
    numeric_delta: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'tier', MatchTier(self.tier))

    @property
    def needs_review(self) -> bool:
        """Timestamp-only matches are flagged for manual review."""
        return self.tier is MatchTier.TIMESTAMP_ONLY
