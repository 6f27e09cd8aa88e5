"""Audit trail of accepted matches.

The engine reports every accepted pair to an injected sink. ``MatchTrace``
collects them so they can be logged, printed for a dry run, or written next
to the output for later review of low-confidence matches.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, List, Protocol

from .models import MatchPair, MatchTier

logger = logging.getLogger(__name__)


class MatchSink(Protocol):
    """Anything that wants to observe accepted pairs."""

    def record(self, pair: MatchPair) -> None:
        ...


class MatchTrace:
    """Collects accepted pairs in decision order."""

    def __init__(self) -> None:
        self._pairs: List[MatchPair] = []

    def record(self, pair: MatchPair) -> None:
        self._pairs.append(pair)

    @property
    def pairs(self) -> List[MatchPair]:
        return list(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def counts_by_tier(self) -> Dict[MatchTier, int]:
        """Number of accepted pairs per tier, every tier present."""
        counts = Counter(pair.tier for pair in self._pairs)
        return {tier: counts.get(tier, 0) for tier in MatchTier}

    def lines(self) -> List[str]:
        """One line per pair, grouped by tier, decision order within a tier."""
        result = []
        for tier in MatchTier:
            for pair in self._pairs:
                if pair.tier is tier:
                    result.append(format_pair(pair))
        return result

    def write(self, path: Path) -> None:
        """Write the trace lines to ``path`` (UTF-8, one per line)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(self.lines())
        path.write_text(text + "\n" if text else "", encoding="utf-8")
        logger.info(f"Match trace written: {{'path': {str(path)!r}, 'pairs': {len(self._pairs)}}}")


def format_pair(pair: MatchPair) -> str:
    """Render a pair as ``[P2]: IMG_0010 ↔ IMG_0011 [Δnum: 1, Δt: 0.50s, 2.10s]``."""
    details = []
    if pair.numeric_delta is not None:
        details.append(f"Δnum: {pair.numeric_delta}")
    if pair.time_delta is not None:
        details.append(f"Δt: {pair.time_delta:.2f}s")
    details.append(f"{pair.video.effective_duration:.2f}s")
    return (
        f"[{pair.tier.pass_label}]: {pair.image.base_name} ↔ {pair.video.base_name} "
        f"[{', '.join(details)}]"
    )
