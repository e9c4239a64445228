"""Shared dataclasses for mergeq.

Types:
- DerivedStatus: Display status computed from raw status and blockers
- Issue: An issue record as returned by the issue store
- MRFields: Merge-request fields parsed from an issue's description
- ListOptions: Query options for the store's list operation
- ByStatus / ReadyOnly: Mutually exclusive base-query selectors
- QueueCriteria: Immutable filter criteria for one queue listing
- QueueEntry: An issue annotated with fields, derived status and age
- RejectRequest: Input to the rejection transition
- RejectionResult: Snapshot of a rejected merge request
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MERGE_REQUEST_TYPE = "merge-request"
INTEGRATION_BRANCH_PREFIX = "integration/"

# Priority value meaning "do not filter by priority"
NO_PRIORITY_FILTER = -1

# Keys consumed by Issue.from_dict; anything else is kept in Issue.extra
_ISSUE_KEYS = frozenset(
    {
        "id",
        "title",
        "description",
        "status",
        "priority",
        "issue_type",
        "type",
        "blocked_by",
        "blocked_by_count",
        "created_at",
        "updated_at",
        "assignee",
        "labels",
    }
)


class DerivedStatus(str, Enum):
    """Effective status of a merge request for display and filtering."""

    READY = "ready"
    BLOCKED = "blocked"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
    REJECTED = "rejected"


def _as_int(value: object, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value))
    except ValueError:
        return default


def _as_str_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v is not None)


@dataclass(frozen=True)
class Issue:
    """An issue record owned by the issue store.

    Attributes:
        id: Unique issue identifier.
        type: Category tag (``issue_type`` in bd JSON).
        status: Raw store status (open, in_progress, closed, rejected).
        priority: Lower is more urgent.
        blocked_by: IDs of unresolved blockers, in store order.
        blocked_by_count: Blocker count; may be set when blocked_by is empty.
        created_at: Creation timestamp as reported by the store.
        title: Issue title.
        description: Free-form body holding the MR ``key: value`` payload.
        updated_at: Last update timestamp.
        assignee: Current assignee, if any.
        labels: Issue labels.
        extra: Store fields not modelled above, preserved for JSON output.
    """

    id: str
    type: str = ""
    status: str = "open"
    priority: int = 0
    blocked_by: tuple[str, ...] = ()
    blocked_by_count: int = 0
    created_at: str = ""
    title: str = ""
    description: str = ""
    updated_at: str = ""
    assignee: str = ""
    labels: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_merge_request(self) -> bool:
        return self.type == MERGE_REQUEST_TYPE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        """Build an Issue from a bd JSON object.

        Raises:
            ValueError: If the object has no ``id``.
        """
        issue_id = data.get("id")
        if not issue_id:
            raise ValueError("issue record has no id")
        issue_type = data.get("issue_type") or data.get("type") or ""
        return cls(
            id=str(issue_id),
            type=str(issue_type),
            status=str(data.get("status") or ""),
            priority=_as_int(data.get("priority")),
            blocked_by=_as_str_list(data.get("blocked_by")),
            blocked_by_count=_as_int(data.get("blocked_by_count")),
            created_at=str(data.get("created_at") or ""),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            updated_at=str(data.get("updated_at") or ""),
            assignee=str(data.get("assignee") or ""),
            labels=_as_str_list(data.get("labels")),
            extra={k: v for k, v in data.items() if k not in _ISSUE_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using bd's field names so scripts can rely on them."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "title": self.title,
                "description": self.description,
                "status": self.status,
                "priority": self.priority,
                "issue_type": self.type,
                "assignee": self.assignee,
                "labels": list(self.labels),
                "blocked_by": list(self.blocked_by),
                "blocked_by_count": self.blocked_by_count,
                "created_at": self.created_at,
                "updated_at": self.updated_at,
            }
        )
        return data


@dataclass(frozen=True)
class MRFields:
    """Merge-request fields carried in an MR issue's description."""

    branch: str = ""
    worker: str = ""
    target: str = ""
    source_issue: str = ""
    rig: str = ""
    merge_commit: str = ""
    close_reason: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "branch": self.branch,
            "worker": self.worker,
            "target": self.target,
            "source_issue": self.source_issue,
            "rig": self.rig,
            "merge_commit": self.merge_commit,
            "close_reason": self.close_reason,
        }


@dataclass(frozen=True)
class ListOptions:
    """Options for IssueStore.list_issues.

    An empty ``status`` means any status; ``priority`` of
    NO_PRIORITY_FILTER means any priority (0 would select P0 only).
    """

    type: str = MERGE_REQUEST_TYPE
    status: str = ""
    priority: int = NO_PRIORITY_FILTER


@dataclass(frozen=True)
class ByStatus:
    """Select merge requests whose raw status matches exactly."""

    status: str = "open"


@dataclass(frozen=True)
class ReadyOnly:
    """Select merge requests with no unresolved blockers."""


QueueSelector = ByStatus | ReadyOnly


@dataclass(frozen=True)
class QueueCriteria:
    """Filter criteria for a single queue listing.

    Attributes:
        selector: Base query, either ByStatus or ReadyOnly.
        worker: Case-insensitive worker name; empty means any worker.
        epic: Epic name matched against target ``integration/<epic>``;
            empty means any target.
        priority: Exact priority; NO_PRIORITY_FILTER means any.
    """

    selector: QueueSelector = field(default_factory=ByStatus)
    worker: str = ""
    epic: str = ""
    priority: int = NO_PRIORITY_FILTER

    @property
    def epic_target(self) -> str:
        return INTEGRATION_BRANCH_PREFIX + self.epic if self.epic else ""


@dataclass(frozen=True)
class QueueEntry:
    """An issue annotated for presentation."""

    issue: Issue
    fields: MRFields | None
    status: DerivedStatus | str
    age: str

    @property
    def display_status(self) -> str:
        if isinstance(self.status, DerivedStatus):
            return self.status.value
        return self.status

    @property
    def branch(self) -> str:
        return self.fields.branch if self.fields else ""

    @property
    def worker(self) -> str:
        return self.fields.worker if self.fields else ""

    def to_dict(self) -> dict[str, Any]:
        data = self.issue.to_dict()
        data["mr_fields"] = self.fields.to_dict() if self.fields else None
        data["display_status"] = self.display_status
        data["age"] = self.age
        return data


@dataclass(frozen=True)
class RejectRequest:
    """Input to the rejection transition.

    Attributes:
        id_or_branch: MR issue ID or branch name.
        reason: Why the MR is rejected; must not be blank.
        notify: Whether to mail the MR's worker.
    """

    id_or_branch: str
    reason: str
    notify: bool = False


@dataclass(frozen=True)
class RejectionResult:
    """Snapshot of a rejected MR, returned for reporting only.

    Attributes:
        branch: The MR's branch.
        worker: The worker that owns the branch.
        issue_id: The source work issue (left open), or empty.
        mr_id: The rejected MR issue.
        reason: Recorded rejection reason.
        notified: True if the worker notification was delivered.
    """

    branch: str
    worker: str
    issue_id: str
    mr_id: str = ""
    reason: str = ""
    notified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "branch": self.branch,
            "worker": self.worker,
            "issue_id": self.issue_id,
            "mr_id": self.mr_id,
            "reason": self.reason,
            "notified": self.notified,
        }
