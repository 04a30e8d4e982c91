"""Tests for color tier selection."""

import pytest

from scripts.flag.tiers import ColorTier, tier_for_count


class TestTierForCount:
    """Tests for tier_for_count."""

    def test_zero_is_off(self):
        assert tier_for_count(0, 1, 2) is ColorTier.OFF

    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, ColorTier.OFF),
            (1, ColorTier.GREEN),
            (3, ColorTier.GREEN),
            (4, ColorTier.BLUE),
            (10, ColorTier.BLUE),
            (11, ColorTier.RED),
            (200, ColorTier.RED),
        ],
    )
    def test_boundaries(self, count, expected):
        """Test the tier edges are inclusive at the top."""
        assert tier_for_count(count, 3, 10) is expected

    def test_default_thresholds(self):
        assert tier_for_count(1, 1, 2) is ColorTier.GREEN
        assert tier_for_count(2, 1, 2) is ColorTier.BLUE
        assert tier_for_count(3, 1, 2) is ColorTier.RED

    def test_tiers_partition_counts(self):
        """Every count maps to exactly the tier its range says."""
        low, high = 2, 5
        for count in range(0, 50):
            tier = tier_for_count(count, low, high)
            if count == 0:
                assert tier is ColorTier.OFF
            elif count <= low:
                assert tier is ColorTier.GREEN
            elif count <= high:
                assert tier is ColorTier.BLUE
            else:
                assert tier is ColorTier.RED

    def test_equal_thresholds_skip_blue(self):
        assert tier_for_count(2, 2, 2) is ColorTier.GREEN
        assert tier_for_count(3, 2, 2) is ColorTier.RED

    def test_colors(self):
        assert ColorTier.OFF.color == "000000"
        assert ColorTier.GREEN.color == "00ff00"
        assert ColorTier.BLUE.color == "0000ff"
        assert ColorTier.RED.color == "ff0000"
