"""Live Photo pairing: descriptor model, filename heuristics and matcher."""

from .config import MatcherConfig
from .engine import FolderGroup, PairMatcher, group_by_folder, match_pairs
from .filename_heuristics import normalize_base, parse_numeric_suffix
from .models import (
    AssetDescriptor,
    AssetKind,
    CaptureTimestamp,
    MatchPair,
    MatchTier,
    TimestampSource,
)
from .trace import MatchSink, MatchTrace, format_pair

__all__ = [
    'MatcherConfig',
    'FolderGroup',
    'PairMatcher',
    'group_by_folder',
    'match_pairs',
    'normalize_base',
    'parse_numeric_suffix',
    'AssetDescriptor',
    'AssetKind',
    'CaptureTimestamp',
    'MatchPair',
    'MatchTier',
    'TimestampSource',
    'MatchSink',
    'MatchTrace',
    'format_pair',
]
