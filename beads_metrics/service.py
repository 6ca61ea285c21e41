"""
Metrics Service

Config-driven entry point for dashboard backends: takes issue snapshots (or
raw beads records) plus the caller's "now" and returns Metrics or a
JSON-ready payload. Nothing is cached between calls.

Usage:
    from beads_metrics.service import MetricsService

    service = MetricsService()
    payload = service.compute_payload_from_records(records, now=datetime.now(UTC))
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from beads_metrics.calculations.metrics_calculator import calculate_metrics
from beads_metrics.config import MetricsConfig, get_config
from beads_metrics.core.logging_config import get_logger
from beads_metrics.domain.granularity import TimeGranularity
from beads_metrics.domain.issue import Issue, parse_issues
from beads_metrics.domain.metrics import Metrics

logger = get_logger(__name__)


class MetricsService:
    """
    Computes dashboard metrics using configured defaults.

    Attributes:
        config: Settings supplying the default granularity and flow bucket cap
    """

    def __init__(self, config: MetricsConfig | None = None):
        self.config = config if config is not None else get_config()

    def compute(
        self,
        issues: Sequence[Issue],
        now: datetime,
        granularity: TimeGranularity | str | None = None,
    ) -> Metrics | None:
        """
        Calculate metrics for parsed issues.

        Args:
            issues: Issue snapshots
            now: Reference instant supplied by the caller
            granularity: Overrides the configured granularity when given

        Returns:
            Metrics, or None when there are no non-tombstone issues
        """
        return calculate_metrics(
            issues,
            now,
            granularity if granularity is not None else self.config.granularity,
            max_flow_buckets=self.config.max_flow_buckets,
        )

    def compute_from_records(
        self,
        records: Iterable[Mapping[str, Any]],
        now: datetime,
        granularity: TimeGranularity | str | None = None,
    ) -> Metrics | None:
        """
        Parse raw beads records, then calculate metrics.

        Records that fail to parse are logged and left out.
        """
        issues = parse_issues(records)
        logger.debug("Parsed issue records", extra={"issue_count": len(issues)})
        return self.compute(issues, now, granularity)

    def compute_payload_from_records(
        self,
        records: Iterable[Mapping[str, Any]],
        now: datetime,
        granularity: TimeGranularity | str | None = None,
    ) -> dict[str, Any] | None:
        """
        Parse records and return the JSON-ready metrics payload.

        Returns:
            Metrics.to_dict() output, or None for the empty state
        """
        metrics = self.compute_from_records(records, now, granularity)
        return metrics.to_dict() if metrics is not None else None
