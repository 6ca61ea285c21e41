#!/usr/bin/env python3
"""
Flow Metrics Calculation Functions

Pure calculation functions for flow metrics (lead time, aging, age
distribution, cumulative flow, average age). They operate on Issue
snapshots plus an explicit "now" and return fresh domain records.

None of these functions read the clock or mutate their inputs.
"""

from collections import Counter
from collections.abc import Sequence
from datetime import datetime

from beads_metrics.core.logging_config import get_logger, log_with_context
from beads_metrics.domain.constants import age_distribution_buckets, aging_thresholds
from beads_metrics.domain.granularity import MS_PER_DAY, MS_PER_HOUR, TimeGranularity, get_granularity_config
from beads_metrics.domain.issue import Issue
from beads_metrics.domain.metrics import AgeBucket, AgingRecord, AgingUrgency, FlowPoint, LeadTimeRecord
from beads_metrics.utils.datetime_utils import (
    bucket_start,
    ceil_units,
    floor_units,
    format_bucket_label,
    to_epoch_ms,
)
from beads_metrics.utils.statistics import calculate_mean

logger = get_logger(__name__)


def calculate_lead_time(
    issues: Sequence[Issue], granularity: TimeGranularity | str = TimeGranularity.DAILY
) -> list[LeadTimeRecord]:
    """
    Calculate lead time: Created -> Closed, one record per closed issue.

    Cycle times are rounded up and never below 1, so an issue closed the
    same day it was opened reports 1 day. Issues without a close instant
    are skipped.

    Args:
        issues: Issue snapshots
        granularity: Bucket width used for closed_date / closed_date_str

    Returns:
        Records sorted by close instant (ties keep input order)
    """
    config = get_granularity_config(granularity)
    dated_records: list[tuple[int, LeadTimeRecord]] = []

    for issue in issues:
        if not issue.is_closed or issue.close_instant is None:
            continue

        created_ms = to_epoch_ms(issue.created_at)
        closed_ms = to_epoch_ms(issue.close_instant)
        duration_ms = closed_ms - created_ms
        closed_bucket = bucket_start(closed_ms, config.bucket_ms)

        record = LeadTimeRecord(
            id=issue.id,
            closed_date=closed_bucket,
            closed_date_str=format_bucket_label(closed_bucket, daily=config.is_daily),
            cycle_time_days=max(1, ceil_units(duration_ms, MS_PER_DAY)),
            cycle_time_hours=max(1, ceil_units(duration_ms, MS_PER_HOUR)),
            title=issue.display_title,
        )
        dated_records.append((closed_ms, record))

    dated_records.sort(key=lambda pair: pair[0])
    return [record for _, record in dated_records]


def classify_urgency(age_days: int) -> AgingUrgency:
    """
    Map an age in whole days to an urgency tag.

    Examples:
        >>> classify_urgency(13)
        <AgingUrgency.GREEN: 'green'>
        >>> classify_urgency(14)
        <AgingUrgency.ORANGE: 'orange'>
        >>> classify_urgency(30)
        <AgingUrgency.RED: 'red'>
    """
    if age_days < aging_thresholds.WARNING_DAYS:
        return AgingUrgency.GREEN
    if age_days < aging_thresholds.CRITICAL_DAYS:
        return AgingUrgency.ORANGE
    return AgingUrgency.RED


def calculate_aging_wip(issues: Sequence[Issue], now: datetime) -> list[AgingRecord]:
    """
    Calculate aging work in progress: one record per open issue.

    Open means any status other than closed and tombstone.

    Args:
        issues: Issue snapshots
        now: Reference instant ages are measured against

    Returns:
        Records in input order
    """
    now_ms = to_epoch_ms(now)
    records = []

    for issue in issues:
        if not issue.is_open:
            continue

        age_ms = now_ms - to_epoch_ms(issue.created_at)
        age_days = floor_units(age_ms, MS_PER_DAY)

        records.append(
            AgingRecord(
                id=issue.id,
                status=issue.status,
                age_days=age_days,
                age_hours=floor_units(age_ms, MS_PER_HOUR),
                urgency=classify_urgency(age_days),
                title=issue.display_title,
            )
        )

    return records


def calculate_age_distribution(issues: Sequence[Issue], now: datetime) -> list[AgeBucket]:
    """
    Bucket open issues into fixed day ranges.

    Always returns the four buckets 0-7d, 8-14d, 15-30d, 30d+ in that order,
    including empty ones. Ages are whole days regardless of granularity.

    Args:
        issues: Issue snapshots
        now: Reference instant ages are measured against

    Returns:
        Four AgeBucket records with bucket_index 0..3
    """
    now_ms = to_epoch_ms(now)
    labels = age_distribution_buckets.LABELS
    upper_bounds = age_distribution_buckets.UPPER_BOUNDS
    counts = [0] * len(labels)

    for issue in issues:
        if not issue.is_open:
            continue

        age_days = floor_units(now_ms - to_epoch_ms(issue.created_at), MS_PER_DAY)

        index = len(upper_bounds)
        for bound_index, upper_bound in enumerate(upper_bounds):
            if age_days <= upper_bound:
                index = bound_index
                break
        counts[index] += 1

    return [AgeBucket(range=label, count=counts[index], bucket_index=index) for index, label in enumerate(labels)]


def calculate_cumulative_flow(
    issues: Sequence[Issue],
    now: datetime,
    granularity: TimeGranularity | str = TimeGranularity.DAILY,
    max_buckets: int | None = None,
) -> list[FlowPoint]:
    """
    Reconstruct the cumulative flow history from creation/close timestamps.

    Emits one point per bucket from the bucket holding the earliest creation
    through the bucket holding "now", with no gaps. Each creation counts from
    its bucket onwards, each close likewise; open = created - closed.
    Throughput is the number of closes in that bucket alone.

    Args:
        issues: Issue snapshots (tombstones are ignored)
        now: Last instant covered by the diagram
        granularity: Bucket width
        max_buckets: Optional cap on emitted points. When the history is
            longer only the most recent buckets are emitted; earlier events
            are folded into the running totals of the first point.

    Returns:
        FlowPoints in chronological order (empty when there are no issues)
    """
    config = get_granularity_config(granularity)
    bucket_ms = config.bucket_ms
    active = [issue for issue in issues if not issue.is_tombstone]

    if not active:
        return []

    first_bucket = min(bucket_start(to_epoch_ms(issue.created_at), bucket_ms) for issue in active)
    last_bucket = bucket_start(to_epoch_ms(now), bucket_ms)

    if first_bucket > last_bucket:
        return []

    bucket_count = (last_bucket - first_bucket) // bucket_ms + 1
    created_by_bucket: Counter[int] = Counter()
    closed_by_bucket: Counter[int] = Counter()

    for issue in active:
        created_index = (bucket_start(to_epoch_ms(issue.created_at), bucket_ms) - first_bucket) // bucket_ms
        if created_index < bucket_count:
            created_by_bucket[created_index] += 1

        if issue.is_closed and issue.close_instant is not None:
            closed_index = (bucket_start(to_epoch_ms(issue.close_instant), bucket_ms) - first_bucket) // bucket_ms
            if 0 <= closed_index < bucket_count:
                closed_by_bucket[closed_index] += 1

    start_index = 0
    if max_buckets is not None and bucket_count > max_buckets:
        start_index = bucket_count - max_buckets
        logger.warning(
            f"Cumulative flow spans {bucket_count} buckets, keeping the latest {max_buckets}",
            extra={"bucket_count": bucket_count, "max_buckets": max_buckets, "granularity": config.value.value},
        )

    running_created = sum(count for index, count in created_by_bucket.items() if index < start_index)
    running_closed = sum(count for index, count in closed_by_bucket.items() if index < start_index)
    points = []

    for index in range(start_index, bucket_count):
        running_created += created_by_bucket[index]
        running_closed += closed_by_bucket[index]
        timestamp = first_bucket + index * bucket_ms

        points.append(
            FlowPoint(
                date=format_bucket_label(timestamp, daily=config.is_daily),
                timestamp=timestamp,
                open=running_created - running_closed,
                closed=running_closed,
                throughput=closed_by_bucket[index],
            )
        )

    log_with_context(
        logger,
        "debug",
        "Cumulative flow reconstructed",
        issue_count=len(active),
        bucket_count=len(points),
        granularity=config.value.value,
    )
    return points


def calculate_average_age(
    issues: Sequence[Issue], now: datetime, granularity: TimeGranularity | str = TimeGranularity.DAILY
) -> float:
    """
    Calculate average age of open issues in the granularity's display unit.

    Each age is rounded down to whole units (days or hours) before averaging.

    Args:
        issues: Issue snapshots
        now: Reference instant ages are measured against
        granularity: Selects the display unit

    Returns:
        Mean age, 0 when there are no open issues
    """
    unit_ms = get_granularity_config(granularity).display_unit_ms
    now_ms = to_epoch_ms(now)

    ages = [floor_units(now_ms - to_epoch_ms(issue.created_at), unit_ms) for issue in issues if issue.is_open]

    return calculate_mean(ages)
