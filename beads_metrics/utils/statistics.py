"""
Statistics Utilities

Order statistics and means for metrics calculations.

Usage:
    from beads_metrics.utils.statistics import calculate_percentile, calculate_mean

    p85 = calculate_percentile(cycle_times, 0.85)
"""

import math
from collections.abc import Sequence


def calculate_percentile(data: Sequence[float], percentile: float) -> float:
    """
    Calculate a single percentile value using the nearest-rank method.

    The value at zero-based index ``ceil(percentile * (n - 1))`` of the sorted
    data is returned. No interpolation happens, so the result is always an
    element of the input.

    Args:
        data: Sequence of numeric values (not modified)
        percentile: Percentile as a fraction in [0, 1]

    Returns:
        Percentile value, or 0 when data is empty

    Example:
        >>> calculate_percentile([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 0.5)
        6
        >>> calculate_percentile([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 0.85)
        9
    """
    if not data:
        return 0

    sorted_data = sorted(data)
    n = len(sorted_data)

    # Round away float noise: 0.7 * 10 == 7.000000000000001
    index = math.ceil(round(percentile * (n - 1), 9))
    index = max(0, min(index, n - 1))

    return sorted_data[index]


def calculate_mean(data: Sequence[float]) -> float:
    """
    Arithmetic mean, 0.0 for empty data.

    Example:
        >>> calculate_mean([10, 5, 0])
        5.0
    """
    if not data:
        return 0.0

    return sum(data) / len(data)
