"""
Domain Models - Type-safe data structures for the metrics engine

This package contains dataclasses representing business domain concepts:
    - issue: Issue snapshots and record parsing
    - granularity: TimeGranularity, GranularityConfig
    - metrics: LeadTimeRecord, AgingRecord, AgeBucket, FlowPoint, Metrics
    - constants: Aging thresholds, histogram buckets, percentiles

Usage:
    from beads_metrics.domain import Issue, TimeGranularity

    issue = Issue.from_dict({"id": "bd-1", "status": "open", "created_at": "2024-01-01T00:00:00Z"})
    if issue.is_open:
        print(f"{issue.id} is work in progress")
"""

from .granularity import GRANULARITY_OPTIONS, DisplayUnit, GranularityConfig, TimeGranularity, get_granularity_config
from .issue import Issue, IssueParseError, parse_issues
from .metrics import AgeBucket, AgingRecord, AgingUrgency, FlowPoint, LeadTimeRecord, Metrics

__all__ = [
    # Issues
    "Issue",
    "IssueParseError",
    "parse_issues",
    # Granularity
    "TimeGranularity",
    "DisplayUnit",
    "GranularityConfig",
    "GRANULARITY_OPTIONS",
    "get_granularity_config",
    # Results
    "AgingUrgency",
    "LeadTimeRecord",
    "AgingRecord",
    "AgeBucket",
    "FlowPoint",
    "Metrics",
]
