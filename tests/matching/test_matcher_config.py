"""Tests for MatcherConfig."""

import pytest
from pydantic import ValidationError

from livephoto_repair.matching.config import MatcherConfig


class TestMatcherConfig:
    """Tests for matcher thresholds."""

    def test_defaults(self):
        """Defaults match a typical iPhone Live Photo."""
        config = MatcherConfig()
        assert config.max_video_duration == 4.0
        assert config.max_time_delta == 4.0
        assert config.max_numeric_delta == 1

    def test_negative_rejected(self):
        """Thresholds cannot be negative."""
        with pytest.raises(ValidationError):
            MatcherConfig(max_time_delta=-1)
        with pytest.raises(ValidationError):
            MatcherConfig(max_numeric_delta=-1)

    def test_unknown_field_rejected(self):
        """Typos in config keys are errors."""
        with pytest.raises(ValidationError):
            MatcherConfig(max_delta=2)

    def test_frozen(self):
        """Thresholds do not change during a run."""
        config = MatcherConfig()
        with pytest.raises(ValidationError):
            config.max_time_delta = 10
