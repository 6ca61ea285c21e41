#!/usr/bin/env python3
"""
Metrics Calculator

Assembles the complete dashboard Metrics record from an issue collection.
"""

from collections.abc import Sequence
from datetime import datetime

from beads_metrics.calculations.flow_metrics_calculations import (
    calculate_age_distribution,
    calculate_aging_wip,
    calculate_average_age,
    calculate_cumulative_flow,
    calculate_lead_time,
)
from beads_metrics.core.logging_config import get_logger
from beads_metrics.domain.constants import percentiles
from beads_metrics.domain.granularity import TimeGranularity, get_granularity_config
from beads_metrics.domain.issue import Issue
from beads_metrics.domain.metrics import Metrics
from beads_metrics.utils.statistics import calculate_percentile

logger = get_logger(__name__)


def format_average_age(value: float, unit: str) -> str:
    """
    Format an average age for display.

    Examples:
        >>> format_average_age(5, "days")
        '5.0 days'
    """
    return f"{value:.1f} {unit}"


def calculate_metrics(
    issues: Sequence[Issue],
    now: datetime,
    granularity: TimeGranularity | str = TimeGranularity.DAILY,
    max_flow_buckets: int | None = None,
) -> Metrics | None:
    """
    Calculate all dashboard metrics for an issue collection.

    Tombstoned issues are dropped first. When nothing remains the result is
    None, which the dashboard renders as its empty state.

    Args:
        issues: Issue snapshots
        now: Reference instant for ages and the end of the flow diagram
        granularity: Bucket width and display unit
        max_flow_buckets: Optional cap on cumulative flow points

    Returns:
        Metrics, or None if there are no non-tombstone issues

    Raises:
        ValueError: If granularity is not a supported setting
    """
    config = get_granularity_config(granularity)
    active_issues = [issue for issue in issues if not issue.is_tombstone]

    if not active_issues:
        logger.debug("No active issues, skipping metrics", extra={"input_count": len(issues)})
        return None

    open_count = sum(1 for issue in active_issues if issue.is_open)
    lead_time_data = calculate_lead_time(active_issues, config.value)
    aging_wip_data = calculate_aging_wip(active_issues, now)
    flow_chart_data = calculate_cumulative_flow(active_issues, now, config.value, max_buckets=max_flow_buckets)
    age_chart_data = calculate_age_distribution(active_issues, now)
    avg_age = calculate_average_age(active_issues, now, config.value)

    cycle_times = [record.cycle_time_days for record in lead_time_data]

    metrics = Metrics(
        avg_age=format_average_age(avg_age, config.display_unit.value),
        avg_age_raw=avg_age,
        display_unit=config.display_unit,
        open_count=open_count,
        cycle_time_p50=calculate_percentile(cycle_times, percentiles.P50),
        cycle_time_p85=calculate_percentile(cycle_times, percentiles.P85),
        lead_time_data=tuple(lead_time_data),
        aging_wip_data=tuple(aging_wip_data),
        flow_chart_data=tuple(flow_chart_data),
        age_chart_data=tuple(age_chart_data),
        granularity=config.value,
    )

    logger.debug(
        f"Calculated {metrics}",
        extra={"issue_count": len(active_issues), "closed_count": len(lead_time_data)},
    )
    return metrics
