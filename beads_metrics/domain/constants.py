#!/usr/bin/env python3
"""
Application Constants

Centralized thresholds and statistics constants for the metrics engine.
Provides immutable configuration values shared by the calculations.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AgingThresholds:
    """
    Urgency thresholds for aging work in progress.

    Ages are whole days since creation.

    Attributes:
        WARNING_DAYS: Age at which an item turns orange (14 days)
        CRITICAL_DAYS: Age at which an item turns red (30 days)

    Example:
        >>> aging_thresholds.WARNING_DAYS
        14
    """

    WARNING_DAYS: int = 14
    """Items aged at least this many days are orange"""

    CRITICAL_DAYS: int = 30
    """Items aged at least this many days are red"""


@dataclass(frozen=True)
class AgeDistributionBuckets:
    """
    Fixed day ranges for the age-distribution histogram.

    Upper bounds are inclusive. Anything older than the last bound falls
    into the overflow bucket.

    Attributes:
        UPPER_BOUNDS: Inclusive upper bound (days) for each bounded bucket
        LABELS: Chart label for each bucket, overflow bucket last
    """

    UPPER_BOUNDS: tuple[int, ...] = (7, 14, 30)
    """Inclusive upper bounds of the bounded buckets"""

    LABELS: tuple[str, ...] = ("0-7d", "8-14d", "15-30d", "30d+")
    """Bucket labels in chart order"""


@dataclass(frozen=True)
class PercentileConfig:
    """
    Percentiles reported for cycle time.

    Expressed as fractions in [0, 1].

    Attributes:
        P50: Median
        P85: Common service-level target
    """

    P50: float = 0.5
    """50th percentile (median)"""

    P85: float = 0.85
    """85th percentile (common SLA target)"""


# Singleton instances for easy import
aging_thresholds = AgingThresholds()
age_distribution_buckets = AgeDistributionBuckets()
percentiles = PercentileConfig()
