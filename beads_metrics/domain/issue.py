"""
Issue domain model - Beads issue snapshots

Represents one issue as read from a beads data store. The metrics engine
only needs identity, status and timestamps; title, priority and type are
carried for display.

Parsing from raw records happens here, at the boundary. Calculations
assume every Issue they receive is valid.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from beads_metrics.utils.datetime_utils import ensure_utc, parse_iso_timestamp
from beads_metrics.utils.error_handling import log_and_continue, log_and_return_default

logger = logging.getLogger(__name__)

CLOSED_STATUS = "closed"
TOMBSTONE_STATUS = "tombstone"

VALID_STATUSES = frozenset(
    {"open", "in_progress", "blocked", CLOSED_STATUS, TOMBSTONE_STATUS, "deferred", "pinned", "hooked"}
)

DEFAULT_PRIORITY = 2


class IssueParseError(ValueError):
    """Raised when a raw record cannot be turned into an Issue."""


@dataclass(frozen=True)
class Issue:
    """
    Immutable snapshot of a beads issue.

    Attributes:
        id: Issue identifier (e.g. "bd-a1b2")
        status: Lifecycle status (open, in_progress, blocked, closed, tombstone, deferred, pinned, hooked)
        created_at: Creation instant (timezone-aware; naive values are treated as UTC)
        updated_at: Last update instant, if known
        closed_at: Close instant, if recorded
        title: Display title
        priority: 0 (critical) to 4 (lowest), display only
        issue_type: task, bug, feature, epic, ... display only

    Example:
        issue = Issue(
            id="bd-42",
            status="closed",
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
            closed_at=datetime(2024, 1, 3, tzinfo=UTC),
        )

        if issue.is_closed:
            print(f"{issue.id} closed at {issue.close_instant}")
    """

    id: str
    status: str
    created_at: datetime
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    title: str = ""
    priority: int = DEFAULT_PRIORITY
    issue_type: str = "task"

    def __post_init__(self) -> None:
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        if self.updated_at is not None:
            object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))
        if self.closed_at is not None:
            object.__setattr__(self, "closed_at", ensure_utc(self.closed_at))

    @property
    def is_closed(self) -> bool:
        return self.status == CLOSED_STATUS

    @property
    def is_tombstone(self) -> bool:
        return self.status == TOMBSTONE_STATUS

    @property
    def is_open(self) -> bool:
        """
        Check if issue counts as work in progress.

        Returns:
            True for any status other than closed and tombstone
        """
        return not self.is_closed and not self.is_tombstone

    @property
    def close_instant(self) -> datetime | None:
        """
        Instant the issue was closed.

        Uses closed_at when recorded, otherwise falls back to updated_at
        (older beads exports only carry updated_at on closed issues).
        """
        return self.closed_at if self.closed_at is not None else self.updated_at

    @property
    def display_title(self) -> str:
        return self.title or self.id

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Issue":
        """
        Build an Issue from a beads JSONL-shaped record.

        Args:
            record: Mapping with at least id, status and created_at

        Returns:
            Parsed Issue

        Raises:
            IssueParseError: If id is missing, status is unknown, created_at is
                missing or unparseable, or the issue closes before it was created

        Example:
            >>> Issue.from_dict({"id": "bd-1", "status": "open", "created_at": "2024-01-01T00:00:00Z"}).id
            'bd-1'
        """
        issue_id = record.get("id")
        if not issue_id or not isinstance(issue_id, str):
            raise IssueParseError(f"Issue record has no id: {record!r}")

        status = record.get("status")
        if status not in VALID_STATUSES:
            raise IssueParseError(f"Issue {issue_id} has unknown status: {status!r}")

        try:
            created_at = parse_iso_timestamp(record.get("created_at"))
        except ValueError as e:
            raise IssueParseError(f"Issue {issue_id} has invalid created_at: {e}") from e
        if created_at is None:
            raise IssueParseError(f"Issue {issue_id} has no created_at")

        updated_at = _parse_optional_timestamp(record, "updated_at", issue_id)
        closed_at = _parse_optional_timestamp(record, "closed_at", issue_id)

        issue = cls(
            id=issue_id,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            closed_at=closed_at,
            title=record.get("title") or "",
            priority=_parse_priority(record.get("priority", DEFAULT_PRIORITY), issue_id),
            issue_type=record.get("issue_type") or "task",
        )

        if issue.is_closed and issue.close_instant is not None and issue.close_instant < issue.created_at:
            raise IssueParseError(f"Issue {issue_id} closes before it was created")

        return issue


def _parse_optional_timestamp(record: Mapping[str, Any], field: str, issue_id: str) -> datetime | None:
    try:
        return parse_iso_timestamp(record.get(field))
    except ValueError as e:
        return log_and_return_default(
            logger,
            e,
            context={"issue_id": issue_id, "field": field, "value": record.get(field)},
            default_value=None,
            error_type="Timestamp parsing",
        )


def _parse_priority(value: Any, issue_id: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 4:
        return value

    return log_and_return_default(
        logger,
        ValueError(f"priority must be an integer 0-4, got {value!r}"),
        context={"issue_id": issue_id, "field": "priority"},
        default_value=DEFAULT_PRIORITY,
        error_type="Priority parsing",
    )


def parse_issues(records: Iterable[Mapping[str, Any]]) -> list[Issue]:
    """
    Parse raw records into Issues, skipping invalid ones.

    Each rejected record is logged with its id and the reason.

    Args:
        records: Iterable of beads JSONL-shaped mappings

    Returns:
        Parsed issues in input order
    """
    issues: list[Issue] = []

    for record in records:
        try:
            issues.append(Issue.from_dict(record))
        except IssueParseError as e:
            log_and_continue(logger, e, context={"issue_id": record.get("id")}, error_type="Issue parsing")
            continue

    return issues
