"""Color tiers for the open task count."""

from enum import Enum


class ColorTier(Enum):
    OFF = "000000"
    GREEN = "00ff00"
    BLUE = "0000ff"
    RED = "ff0000"

    @property
    def color(self) -> str:
        return self.value


def tier_for_count(count: int, low: int, high: int) -> ColorTier:
    """
    Maps a task count to a color tier.

    Green for (0, low], blue for (low, high], red above high and off otherwise.
    """
    if 0 < count <= low:
        return ColorTier.GREEN
    if low < count <= high:
        return ColorTier.BLUE
    if count > high:
        return ColorTier.RED
    return ColorTier.OFF
