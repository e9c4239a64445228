"""MergeQueue: queue operations bound to a single rig."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mergeq.core.models import RejectRequest
from mergeq.domain.queue_filter import filter_queue
from mergeq.domain.rejection import reject_merge_request

if TYPE_CHECKING:
    from datetime import datetime

    from mergeq.core.models import QueueCriteria, QueueEntry, RejectionResult
    from mergeq.core.protocols import IssueStore, Mailer


@dataclass(frozen=True)
class MergeQueue:
    """The merge queue of one rig.

    Attributes:
        rig: Rig name.
        store: Issue store holding the rig's merge requests.
        mailer: Used for rejection notifications; None disables them.
    """

    rig: str
    store: IssueStore
    mailer: Mailer | None = None

    def list_entries(
        self, criteria: QueueCriteria, now: datetime | None = None
    ) -> list[QueueEntry]:
        """List merge requests matching criteria, in store order."""
        return filter_queue(self.store, criteria, now=now)

    def reject_mr(
        self, id_or_branch: str, reason: str, notify: bool = False
    ) -> RejectionResult:
        """Reject a merge request by ID or branch, leaving its source issue open."""
        return reject_merge_request(
            self.store,
            RejectRequest(id_or_branch=id_or_branch, reason=reason, notify=notify),
            mailer=self.mailer,
            rig=self.rig,
        )
