"""
Beads Metrics - Flow analytics engine for beads issue trackers

Turns a snapshot of beads issues into the data behind a flow dashboard:
cumulative flow, lead-time percentiles, aging WIP, age distribution and
average age.

Package Structure:
    - core: Infrastructure (logging)
    - domain: Domain models (Issue, granularity, metric records)
    - utils: Shared helpers (datetime, statistics, error handling)
    - calculations: Pure metric calculations and the orchestrator
"""

__version__ = "1.0.0"
__author__ = "Engineering Metrics Team"
