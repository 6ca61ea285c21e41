"""
Tests for the Metrics Calculator

Covers the empty-state sentinel, end-to-end assembly, percentiles,
granularity handling and immutability of inputs and results.
"""

import json
from datetime import UTC, datetime

import pytest

from beads_metrics.calculations.metrics_calculator import calculate_metrics, format_average_age
from beads_metrics.domain.granularity import DisplayUnit, TimeGranularity


@pytest.fixture
def mixed_issues(make_issue):
    """Open, in-progress, closed and tombstoned issues relative to 2024-01-15"""
    return [
        make_issue(id="A", status="open", created_at="2024-01-05T00:00:00Z"),
        make_issue(id="B", status="in_progress", created_at="2024-01-10T00:00:00Z"),
        make_issue(
            id="C",
            status="closed",
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-03T00:00:00Z",
        ),
        make_issue(id="D", status="tombstone", created_at="2023-12-01T00:00:00Z"),
    ]


class TestCalculateMetricsEmptyState:
    """Test the None sentinel"""

    def test_returns_none_for_empty_issues(self, now):
        """Test empty collection yields None"""
        assert calculate_metrics([], now) is None

    def test_returns_none_for_only_tombstones(self, make_issue, now):
        """Test tombstone-only collection yields None"""
        issues = [make_issue(id="t1", status="tombstone"), make_issue(id="t2", status="tombstone")]
        assert calculate_metrics(issues, now) is None

    def test_single_closed_issue_is_not_empty(self, make_issue, now):
        """Test one closed issue still produces metrics"""
        issues = [make_issue(status="closed", updated_at="2024-01-02T00:00:00Z")]

        result = calculate_metrics(issues, now)

        assert result is not None
        assert result.open_count == 0
        assert result.avg_age_raw == 0


class TestCalculateMetrics:
    """Test full metrics assembly"""

    def test_calculates_all_metrics(self, mixed_issues, now):
        """Test counts and collection sizes for a mixed collection"""
        result = calculate_metrics(mixed_issues, now)

        assert result is not None
        assert result.open_count == 2
        assert len(result.lead_time_data) == 1
        assert len(result.aging_wip_data) == 2
        assert len(result.age_chart_data) == 4
        assert len(result.flow_chart_data) > 0
        assert isinstance(result.avg_age, str)
        assert isinstance(result.cycle_time_p50, (int, float))
        assert isinstance(result.cycle_time_p85, (int, float))

    def test_end_to_end_values(self, mixed_issues, now):
        """Test the exact values for the mixed collection"""
        result = calculate_metrics(mixed_issues, now)

        assert result.lead_time_data[0].id == "C"
        assert result.lead_time_data[0].cycle_time_days == 2
        assert {record.id for record in result.aging_wip_data} == {"A", "B"}
        assert sum(bucket.count for bucket in result.age_chart_data) == 2
        assert result.cycle_time_p50 == 2
        assert result.cycle_time_p85 == 2
        assert result.avg_age_raw == 7.5
        assert result.avg_age == "7.5 days"
        assert result.display_unit is DisplayUnit.DAYS
        assert result.granularity is TimeGranularity.DAILY

    def test_tombstone_contributes_to_nothing(self, mixed_issues, now):
        """Test the tombstone is absent from every collection and the flow range"""
        result = calculate_metrics(mixed_issues, now)

        ids = {record.id for record in result.lead_time_data} | {record.id for record in result.aging_wip_data}
        assert "D" not in ids
        # Jan 1 through Jan 15, not back to the tombstone's December creation
        assert len(result.flow_chart_data) == 15
        assert result.flow_chart_data[0].date == "2024-01-01"
        assert result.flow_chart_data[-1].open == 2
        assert result.flow_chart_data[-1].closed == 1

    def test_calculates_percentiles_from_lead_time_data(self, make_issue, now):
        """Test P50/P85 over cycle times of 1..10 days"""
        issues = [
            make_issue(
                id=f"closed-{i}",
                status="closed",
                created_at="2024-01-01T00:00:00Z",
                updated_at=f"2024-01-{i + 2:02d}T00:00:00Z",
            )
            for i in range(10)
        ]

        result = calculate_metrics(issues, now)

        assert result.cycle_time_p50 > 0
        assert result.cycle_time_p85 > result.cycle_time_p50
        assert result.cycle_time_p50 == 6
        assert result.cycle_time_p85 == 9

    def test_no_closed_issues_gives_zero_percentiles(self, make_issue, now):
        """Test percentiles fall back to 0 without closed issues"""
        result = calculate_metrics([make_issue()], now)

        assert result.cycle_time_p50 == 0
        assert result.cycle_time_p85 == 0

    def test_hourly_granularity(self, mixed_issues, now):
        """Test hourly metrics report hours and hourly flow buckets"""
        result = calculate_metrics(mixed_issues, now, TimeGranularity.HOURLY)

        assert result.display_unit is DisplayUnit.HOURS
        assert result.avg_age_raw == 180
        assert result.avg_age == "180.0 hours"
        assert result.granularity is TimeGranularity.HOURLY
        assert len(result.flow_chart_data) == 14 * 24 + 1
        assert result.flow_chart_data[0].date == "2024-01-01 00:00"

    def test_accepts_string_granularity(self, mixed_issues, now):
        """Test granularity given by its string value"""
        result = calculate_metrics(mixed_issues, now, "8-hourly")

        assert result.granularity is TimeGranularity.EIGHT_HOURLY
        assert result.display_unit is DisplayUnit.DAYS

    def test_rejects_unknown_granularity(self, mixed_issues, now):
        """Test unknown granularity raises ValueError"""
        with pytest.raises(ValueError, match="Unknown granularity"):
            calculate_metrics(mixed_issues, now, "weekly")

    def test_max_flow_buckets_is_applied(self, mixed_issues, now):
        """Test the flow cap reaches the cumulative flow diagram"""
        result = calculate_metrics(mixed_issues, now, max_flow_buckets=7)

        assert len(result.flow_chart_data) == 7
        assert result.flow_chart_data[-1].date == "2024-01-15"

    def test_does_not_mutate_input(self, mixed_issues, now):
        """Test the caller's list is unchanged"""
        original = list(mixed_issues)

        calculate_metrics(mixed_issues, now)

        assert mixed_issues == original

    def test_result_collections_are_immutable(self, mixed_issues, now):
        """Test result collections are tuples"""
        result = calculate_metrics(mixed_issues, now)

        assert isinstance(result.lead_time_data, tuple)
        assert isinstance(result.aging_wip_data, tuple)
        assert isinstance(result.flow_chart_data, tuple)
        assert isinstance(result.age_chart_data, tuple)

    def test_deterministic_for_same_now(self, mixed_issues, now):
        """Test repeated calls with the same inputs are equal"""
        assert calculate_metrics(mixed_issues, now) == calculate_metrics(mixed_issues, now)

    def test_to_dict_is_json_serializable(self, mixed_issues, now):
        """Test the payload round-trips through json"""
        payload = calculate_metrics(mixed_issues, now).to_dict()

        decoded = json.loads(json.dumps(payload))

        assert decoded["open_count"] == 2
        assert decoded["granularity"] == "daily"
        assert decoded["display_unit"] == "days"
        assert decoded["age_chart_data"][0] == {"range": "0-7d", "count": 1, "bucket_index": 0}


class TestFormatAverageAge:
    """Test average age display formatting"""

    def test_one_decimal_with_unit(self):
        """Test value is rounded to one decimal and suffixed with the unit"""
        assert format_average_age(5, "days") == "5.0 days"
        assert format_average_age(12.345, "hours") == "12.3 hours"

    def test_zero(self):
        """Test zero formats cleanly"""
        assert format_average_age(0, "days") == "0.0 days"


def test_now_is_used_instead_of_clock(make_issue):
    """Test ages follow the supplied now, not the wall clock"""
    issues = [make_issue(created_at="2000-01-01T00:00:00Z")]

    result = calculate_metrics(issues, datetime(2000, 1, 11, tzinfo=UTC))

    assert result.avg_age_raw == 10
    assert len(result.flow_chart_data) == 11
