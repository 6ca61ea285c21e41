"""
Granularity domain model - Time bucketing for flow charts

Each granularity setting defines:
    - the width of a chart bucket in hours
    - the unit ages are displayed in (hours or days)

Every calculation receives the granularity and uses both values from here.
"""

from dataclasses import dataclass
from enum import Enum

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR


class TimeGranularity(str, Enum):
    """Granularity options selectable on the dashboard."""

    HOURLY = "hourly"
    FOUR_HOURLY = "4-hourly"
    EIGHT_HOURLY = "8-hourly"
    DAILY = "daily"


class DisplayUnit(str, Enum):
    """Unit used for ages and average age."""

    HOURS = "hours"
    DAYS = "days"


@dataclass(frozen=True)
class GranularityConfig:
    """
    Bucket width and display unit for one granularity setting.

    Attributes:
        value: The granularity this config describes
        label: Human-readable label for selectors
        hours_per_bucket: Width of one chart bucket in hours
        display_unit: Unit ages are reported in

    Example:
        >>> config = get_granularity_config("4-hourly")
        >>> config.hours_per_bucket
        4
        >>> config.display_unit
        <DisplayUnit.HOURS: 'hours'>
    """

    value: TimeGranularity
    label: str
    hours_per_bucket: int
    display_unit: DisplayUnit

    @property
    def bucket_ms(self) -> int:
        """Bucket width in milliseconds."""
        return self.hours_per_bucket * MS_PER_HOUR

    @property
    def display_unit_ms(self) -> int:
        """Length of one display unit in milliseconds."""
        return MS_PER_HOUR if self.display_unit is DisplayUnit.HOURS else MS_PER_DAY

    @property
    def is_daily(self) -> bool:
        return self.hours_per_bucket == 24


GRANULARITY_OPTIONS: tuple[GranularityConfig, ...] = (
    GranularityConfig(TimeGranularity.HOURLY, "Hourly", 1, DisplayUnit.HOURS),
    GranularityConfig(TimeGranularity.FOUR_HOURLY, "4-Hour", 4, DisplayUnit.HOURS),
    GranularityConfig(TimeGranularity.EIGHT_HOURLY, "8-Hour", 8, DisplayUnit.DAYS),
    GranularityConfig(TimeGranularity.DAILY, "Daily", 24, DisplayUnit.DAYS),
)

_OPTIONS_BY_VALUE = {option.value: option for option in GRANULARITY_OPTIONS}


def get_granularity_config(granularity: TimeGranularity | str) -> GranularityConfig:
    """
    Look up the configuration for a granularity setting.

    Args:
        granularity: TimeGranularity member or its string value ("hourly", "daily", ...)

    Returns:
        Matching GranularityConfig

    Raises:
        ValueError: If the granularity is not one of the four supported settings
    """
    try:
        key = TimeGranularity(granularity)
    except ValueError as e:
        valid = ", ".join(option.value.value for option in GRANULARITY_OPTIONS)
        raise ValueError(f"Unknown granularity: {granularity!r} (expected one of: {valid})") from e

    return _OPTIONS_BY_VALUE[key]
