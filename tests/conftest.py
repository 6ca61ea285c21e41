"""
Pytest configuration and shared fixtures

Provides a fixed reference instant and an Issue factory for calculation tests.
"""

from datetime import UTC, datetime

import pytest

from beads_metrics.config import reset_config
from beads_metrics.domain.issue import Issue


def ts(value: str) -> datetime:
    """Parse a test timestamp like '2024-01-15T00:00:00Z'."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ===== Domain Model Fixtures =====


@pytest.fixture
def now():
    """Provide a consistent reference instant for age calculations"""
    return datetime(2024, 1, 15, 0, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_issue():
    """Provide a factory for Issue snapshots with sensible defaults"""

    def _make_issue(
        id: str = "test-123",
        status: str = "open",
        created_at: str = "2024-01-01T00:00:00Z",
        updated_at: str | None = None,
        closed_at: str | None = None,
        title: str = "Test Issue",
        priority: int = 2,
    ) -> Issue:
        return Issue(
            id=id,
            status=status,
            created_at=ts(created_at),
            updated_at=ts(updated_at) if updated_at else None,
            closed_at=ts(closed_at) if closed_at else None,
            title=title,
            priority=priority,
        )

    return _make_issue


@pytest.fixture
def sample_records():
    """Provide raw beads JSONL-shaped records"""
    return [
        {"id": "bd-1", "title": "Open issue", "status": "open", "priority": 1, "created_at": "2024-01-05T00:00:00Z"},
        {
            "id": "bd-2",
            "title": "Closed issue",
            "status": "closed",
            "priority": 2,
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-03T00:00:00Z",
        },
        {"id": "bd-3", "title": "Deleted", "status": "tombstone", "created_at": "2024-01-02T00:00:00Z"},
    ]


# ===== Configuration Fixtures =====


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Isolate tests from BEADS_METRICS_* variables and the cached config"""
    for name in (
        "BEADS_METRICS_GRANULARITY",
        "BEADS_METRICS_MAX_FLOW_BUCKETS",
        "BEADS_METRICS_LOG_LEVEL",
        "BEADS_METRICS_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
