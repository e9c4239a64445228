"""Rejection transition for merge requests.

Rejecting an MR moves only the MR issue to ``rejected``. The source work
issue stays open because the work is not done. The worker can optionally
be mailed; delivery is best-effort and never fails the transition.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mergeq.core.errors import (
    InvalidTransitionError,
    IssueNotFoundError,
    IssueStoreError,
    MRNotFoundError,
    NotificationError,
    ValidationError,
)
from mergeq.core.models import RejectionResult

if TYPE_CHECKING:
    from mergeq.core.models import Issue, MRFields, RejectRequest
    from mergeq.core.protocols import IssueStore, Mailer

logger = logging.getLogger(__name__)

REJECTED_STATUS = "rejected"

# Raw statuses from which an MR may be rejected
REJECTABLE_STATUSES = frozenset({"open", "in_progress"})


def validate_request(request: RejectRequest) -> None:
    """Check the request before anything touches the store.

    Raises:
        ValidationError: If the identifier or reason is blank.
    """
    if not request.id_or_branch.strip():
        raise ValidationError("merge request ID or branch is required")
    if not request.reason.strip():
        raise ValidationError("a rejection reason is required")


def check_transition(issue: Issue) -> None:
    """Raise InvalidTransitionError unless the MR can be rejected."""
    if issue.status not in REJECTABLE_STATUSES:
        raise InvalidTransitionError(issue.id, issue.status, REJECTED_STATUS)


def worker_address(rig: str, worker: str) -> str:
    """Mail address for a worker in a rig."""
    return f"{rig}/{worker}" if rig else worker


def _with_context(exc: IssueStoreError, context: str) -> IssueStoreError:
    """Copy a store error with context prefixed, keeping its type."""
    message = f"{context}: {exc}"
    if isinstance(exc, InvalidTransitionError):
        return InvalidTransitionError(
            exc.issue_id, exc.current, exc.target, exc.detail, message=message
        )
    if isinstance(exc, IssueNotFoundError):
        return type(exc)(exc.identifier, message)
    return IssueStoreError(message)


def _notify_worker(
    mailer: Mailer,
    rig: str,
    mr: Issue,
    fields: MRFields | None,
    reason: str,
) -> bool:
    worker = fields.worker if fields else ""
    if not worker:
        logger.warning("Not notifying: MR %s has no worker", mr.id)
        return False
    branch = fields.branch if fields else ""
    subject = f"Merge request rejected: {branch or mr.id}"
    lines = [
        f"Your merge request {mr.id} was rejected.",
        "",
        f"Branch: {branch}",
        f"Reason: {reason}",
    ]
    if fields and fields.source_issue:
        lines.append(f"Issue:  {fields.source_issue} (still open)")
    try:
        mailer.send(worker_address(rig, worker), subject, "\n".join(lines))
    except NotificationError as exc:
        logger.warning("Failed to notify %s about %s: %s", worker, mr.id, exc)
        return False
    return True


def reject_merge_request(
    store: IssueStore,
    request: RejectRequest,
    mailer: Mailer | None = None,
    rig: str = "",
) -> RejectionResult:
    """Reject a merge request.

    Args:
        store: Issue store for the rig.
        request: Identifier, reason and notify flag.
        mailer: Used when request.notify is set; None skips notification.
        rig: Rig name, used to address the worker.

    Returns:
        RejectionResult whose issue_id is the source work issue.

    Raises:
        ValidationError: Blank identifier or reason (no store call made).
        MRNotFoundError: Identifier does not resolve to a merge request.
        InvalidTransitionError: MR is already closed or rejected.
        IssueStoreError: Store failure while updating the MR.
    """
    validate_request(request)
    reason = request.reason.strip()

    mr = store.resolve_mr(request.id_or_branch)
    if not mr.is_merge_request:
        raise MRNotFoundError(
            request.id_or_branch,
            f"{mr.id} is a {mr.type or 'untyped'} issue, not a merge request",
        )
    check_transition(mr)

    try:
        store.update_status(mr.id, REJECTED_STATUS, reason)
    except IssueStoreError as exc:
        raise _with_context(exc, f"rejecting {mr.id}") from exc
    logger.info("Rejected %s: %s", mr.id, reason)

    fields = store.parse_mr_fields(mr)
    notified = False
    if request.notify:
        if mailer is None:
            logger.warning("Notification requested but no mailer configured")
        else:
            notified = _notify_worker(mailer, rig, mr, fields, reason)

    return RejectionResult(
        branch=fields.branch if fields else "",
        worker=fields.worker if fields else "",
        issue_id=fields.source_issue if fields else "",
        mr_id=mr.id,
        reason=reason,
        notified=notified,
    )
