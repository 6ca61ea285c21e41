"""
Tests for granularity domain model
"""

import pytest

from beads_metrics.domain.granularity import (
    GRANULARITY_OPTIONS,
    MS_PER_DAY,
    MS_PER_HOUR,
    DisplayUnit,
    TimeGranularity,
    get_granularity_config,
)


class TestGranularityOptions:
    """Test the granularity table"""

    @pytest.mark.parametrize(
        "granularity,hours,unit",
        [
            (TimeGranularity.HOURLY, 1, DisplayUnit.HOURS),
            (TimeGranularity.FOUR_HOURLY, 4, DisplayUnit.HOURS),
            (TimeGranularity.EIGHT_HOURLY, 8, DisplayUnit.DAYS),
            (TimeGranularity.DAILY, 24, DisplayUnit.DAYS),
        ],
    )
    def test_bucket_width_and_unit(self, granularity, hours, unit):
        """Test each setting's bucket width and display unit"""
        config = get_granularity_config(granularity)

        assert config.value is granularity
        assert config.hours_per_bucket == hours
        assert config.display_unit is unit
        assert config.bucket_ms == hours * MS_PER_HOUR

    def test_four_options(self):
        """Test exactly four settings are offered"""
        assert [option.value for option in GRANULARITY_OPTIONS] == list(TimeGranularity)

    def test_display_unit_ms(self):
        """Test display unit lengths"""
        assert get_granularity_config("4-hourly").display_unit_ms == MS_PER_HOUR
        assert get_granularity_config("8-hourly").display_unit_ms == MS_PER_DAY

    def test_is_daily(self):
        """Test only daily buckets use date-only labels"""
        assert get_granularity_config("daily").is_daily
        assert not get_granularity_config("8-hourly").is_daily

    def test_config_is_frozen(self):
        """Test GranularityConfig is immutable"""
        config = get_granularity_config("daily")
        with pytest.raises(AttributeError):
            config.hours_per_bucket = 12  # type: ignore


class TestGetGranularityConfig:
    """Test granularity lookup"""

    def test_accepts_string_value(self):
        """Test lookup by string value"""
        assert get_granularity_config("hourly").value is TimeGranularity.HOURLY

    def test_enum_compares_to_string(self):
        """Test enum members equal their string values"""
        assert TimeGranularity.FOUR_HOURLY == "4-hourly"

    def test_unknown_granularity_raises(self):
        """Test unsupported settings are rejected"""
        with pytest.raises(ValueError, match="Unknown granularity"):
            get_granularity_config("weekly")
