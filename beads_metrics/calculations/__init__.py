"""
Metric Calculations - Pure functions from issues to chart data

Usage:
    from beads_metrics.calculations import calculate_metrics

    metrics = calculate_metrics(issues, now=datetime.now(UTC), granularity="daily")
"""

from .flow_metrics_calculations import (
    calculate_age_distribution,
    calculate_aging_wip,
    calculate_average_age,
    calculate_cumulative_flow,
    calculate_lead_time,
    classify_urgency,
)
from .metrics_calculator import calculate_metrics, format_average_age

__all__ = [
    "calculate_lead_time",
    "calculate_aging_wip",
    "classify_urgency",
    "calculate_age_distribution",
    "calculate_cumulative_flow",
    "calculate_average_age",
    "calculate_metrics",
    "format_average_age",
]
