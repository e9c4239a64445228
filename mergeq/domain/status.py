"""Derived display status for merge requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mergeq.core.models import DerivedStatus

if TYPE_CHECKING:
    from mergeq.core.models import Issue

_PASSTHROUGH = {s.value: s for s in DerivedStatus}


def is_blocked(issue: Issue) -> bool:
    """True if the store reports any unresolved blocker for the issue."""
    return len(issue.blocked_by) > 0 or issue.blocked_by_count > 0


def derive_status(issue: Issue) -> DerivedStatus | str:
    """Compute the effective status of an MR.

    Open MRs are ``blocked`` if they have blockers and ``ready`` otherwise.
    Every other raw status is returned unchanged; statuses outside
    DerivedStatus are returned as plain strings.
    """
    if issue.status == "open":
        return DerivedStatus.BLOCKED if is_blocked(issue) else DerivedStatus.READY
    return _PASSTHROUGH.get(issue.status, issue.status)
