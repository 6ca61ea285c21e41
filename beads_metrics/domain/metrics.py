"""
Metric domain models - Chart-ready results of the metrics engine

Value objects produced fresh on every calculation:
    - LeadTimeRecord: cycle time of one closed issue
    - AgingRecord: age and urgency of one open issue
    - AgeBucket: one bar of the age-distribution histogram
    - FlowPoint: one bucket of the cumulative flow diagram
    - Metrics: everything the dashboard renders, in one record
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .granularity import DisplayUnit, TimeGranularity


class AgingUrgency(str, Enum):
    """Three-way urgency tag for aging work in progress."""

    GREEN = "green"
    ORANGE = "orange"
    RED = "red"

    @property
    def color(self) -> str:
        """Hex color used by the aging WIP scatter plot."""
        return _URGENCY_COLORS[self]


_URGENCY_COLORS = {
    AgingUrgency.GREEN: "#10b981",
    AgingUrgency.ORANGE: "#f59e0b",
    AgingUrgency.RED: "#ef4444",
}


@dataclass(frozen=True)
class LeadTimeRecord:
    """
    Cycle time of one closed issue.

    Attributes:
        id: Issue identifier
        closed_date: Epoch ms of the start of the bucket the issue closed in
        closed_date_str: Label of that bucket
        cycle_time_days: Whole days from creation to close, rounded up, at least 1
        cycle_time_hours: Whole hours from creation to close, rounded up, at least 1
        title: Display title (falls back to id)
    """

    id: str
    closed_date: int
    closed_date_str: str
    cycle_time_days: int
    cycle_time_hours: int
    title: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "closed_date": self.closed_date,
            "closed_date_str": self.closed_date_str,
            "cycle_time_days": self.cycle_time_days,
            "cycle_time_hours": self.cycle_time_hours,
            "title": self.title,
        }


@dataclass(frozen=True)
class AgingRecord:
    """
    Age of one open issue.

    Attributes:
        id: Issue identifier
        status: Issue status (open, in_progress, blocked, ...)
        age_days: Whole days since creation, rounded down
        age_hours: Whole hours since creation, rounded down
        urgency: Green/orange/red tag derived from age_days
        title: Display title (falls back to id)
    """

    id: str
    status: str
    age_days: int
    age_hours: int
    urgency: AgingUrgency
    title: str

    @property
    def color(self) -> str:
        return self.urgency.color

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "age_days": self.age_days,
            "age_hours": self.age_hours,
            "urgency": self.urgency.value,
            "color": self.color,
            "title": self.title,
        }


@dataclass(frozen=True)
class AgeBucket:
    """
    One bar of the age-distribution histogram.

    bucket_index is fixed per label so charts keep the same color per bar.
    """

    range: str
    count: int
    bucket_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range, "count": self.count, "bucket_index": self.bucket_index}


@dataclass(frozen=True)
class FlowPoint:
    """
    One bucket of the cumulative flow diagram.

    Attributes:
        date: Sortable bucket label ("YYYY-MM-DD" or "YYYY-MM-DD HH:00")
        timestamp: Bucket start in epoch milliseconds
        open: Issues created so far minus issues closed so far
        closed: Issues closed so far
        throughput: Issues closed within this bucket only
    """

    date: str
    timestamp: int
    open: int
    closed: int
    throughput: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "timestamp": self.timestamp,
            "open": self.open,
            "closed": self.closed,
            "throughput": self.throughput,
        }


@dataclass(frozen=True)
class Metrics:
    """
    Complete dashboard metrics for one issue collection.

    A Metrics instance only exists when at least one non-tombstone issue
    was present; otherwise the calculator returns None.

    Attributes:
        avg_age: Average age of open issues formatted with its unit ("5.0 days")
        avg_age_raw: Unrounded average age in display_unit
        display_unit: Unit of avg_age_raw (hours or days)
        open_count: Issues that are neither closed nor tombstoned
        cycle_time_p50: Median cycle time in days
        cycle_time_p85: 85th percentile cycle time in days
        lead_time_data: Closed issues ordered by close instant
        aging_wip_data: Open issues with age and urgency
        flow_chart_data: Cumulative flow points in chronological order
        age_chart_data: The four age-distribution buckets
        granularity: Granularity the metrics were computed for

    Example:
        metrics = calculate_metrics(issues, now, TimeGranularity.DAILY)
        if metrics is not None:
            print(f"{metrics.open_count} open, typical cycle time {metrics.cycle_time_p50}d")
    """

    avg_age: str
    avg_age_raw: float
    display_unit: DisplayUnit
    open_count: int
    cycle_time_p50: float
    cycle_time_p85: float
    lead_time_data: tuple[LeadTimeRecord, ...]
    aging_wip_data: tuple[AgingRecord, ...]
    flow_chart_data: tuple[FlowPoint, ...]
    age_chart_data: tuple[AgeBucket, ...]
    granularity: TimeGranularity

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-serializable representation for chart components.

        Returns:
            Dict with enum values flattened to strings and collections to lists
        """
        return {
            "avg_age": self.avg_age,
            "avg_age_raw": self.avg_age_raw,
            "display_unit": self.display_unit.value,
            "open_count": self.open_count,
            "cycle_time_p50": self.cycle_time_p50,
            "cycle_time_p85": self.cycle_time_p85,
            "lead_time_data": [record.to_dict() for record in self.lead_time_data],
            "aging_wip_data": [record.to_dict() for record in self.aging_wip_data],
            "flow_chart_data": [point.to_dict() for point in self.flow_chart_data],
            "age_chart_data": [bucket.to_dict() for bucket in self.age_chart_data],
            "granularity": self.granularity.value,
        }

    def __str__(self) -> str:
        return (
            f"Metrics(granularity={self.granularity.value}, open={self.open_count}, "
            f"avg_age={self.avg_age}, p50={self.cycle_time_p50}d, p85={self.cycle_time_p85}d)"
        )
