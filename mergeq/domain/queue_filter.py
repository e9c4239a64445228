"""QueueFilter: build the merge queue view from issue store queries.

The pipeline has one I/O step and a series of pure steps:

1. Base query (I/O): the store's ready query, or a type/status/priority list
2. Type filter: keep merge requests only (ready query returns every type)
3. Worker/epic filters on the extracted MR fields
4. Annotation with derived status and age

Ordering is whatever the store returned; nothing here re-sorts.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mergeq.core.models import (
    ListOptions,
    MERGE_REQUEST_TYPE,
    NO_PRIORITY_FILTER,
    QueueEntry,
    ReadyOnly,
)
from mergeq.domain.age import format_age
from mergeq.domain.mr_fields import extract_mr_fields
from mergeq.domain.status import derive_status

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mergeq.core.models import Issue, MRFields, QueueCriteria
    from mergeq.core.protocols import IssueStore

logger = logging.getLogger(__name__)


class QueueFilter:
    """Pure filtering steps for the merge queue.

    All methods are static and do no I/O, so they can be tested directly
    against fixture issues.
    """

    @staticmethod
    def only_merge_requests(issues: Sequence[Issue]) -> list[Issue]:
        """Drop issues whose type is not merge-request."""
        return [i for i in issues if i.type == MERGE_REQUEST_TYPE]

    @staticmethod
    def matches_worker(fields: MRFields | None, worker: str) -> bool:
        """Case-insensitive exact worker match; empty worker matches all."""
        if not worker:
            return True
        actual = fields.worker if fields else ""
        return actual.casefold() == worker.casefold()

    @staticmethod
    def matches_target(fields: MRFields | None, target: str) -> bool:
        """Exact target branch match; empty target matches all."""
        if not target:
            return True
        actual = fields.target if fields else ""
        return actual == target

    @staticmethod
    def apply_filters(
        issues: Sequence[Issue],
        criteria: QueueCriteria,
        extract: Callable[[Issue], MRFields | None] = extract_mr_fields,
    ) -> list[tuple[Issue, MRFields | None]]:
        """Apply worker and epic filters, pairing each kept issue with its fields.

        Args:
            issues: Candidate issues in store order.
            criteria: Filter criteria.
            extract: Field extractor, normally the store's parse_mr_fields.

        Returns:
            (issue, fields) pairs for issues passing every filter.
        """
        target = criteria.epic_target
        kept: list[tuple[Issue, MRFields | None]] = []
        for issue in issues:
            fields = extract(issue)
            if not QueueFilter.matches_worker(fields, criteria.worker):
                continue
            if not QueueFilter.matches_target(fields, target):
                continue
            kept.append((issue, fields))
        return kept

    @staticmethod
    def annotate(
        pairs: Sequence[tuple[Issue, MRFields | None]], now: datetime
    ) -> list[QueueEntry]:
        """Attach derived status and age to each issue."""
        return [
            QueueEntry(
                issue=issue,
                fields=fields,
                status=derive_status(issue),
                age=format_age(issue.created_at, now),
            )
            for issue, fields in pairs
        ]


def fetch_candidates(store: IssueStore, criteria: QueueCriteria) -> list[Issue]:
    """Run the base query for the criteria's selector."""
    selector = criteria.selector
    if isinstance(selector, ReadyOnly):
        issues = QueueFilter.only_merge_requests(store.ready())
        if criteria.priority != NO_PRIORITY_FILTER:
            issues = [i for i in issues if i.priority == criteria.priority]
        logger.debug("ready query returned %d merge requests", len(issues))
        return issues
    options = ListOptions(
        type=MERGE_REQUEST_TYPE,
        status=selector.status,
        priority=criteria.priority,
    )
    issues = store.list_issues(options)
    logger.debug("list query %s returned %d issues", options, len(issues))
    return issues


def filter_queue(
    store: IssueStore,
    criteria: QueueCriteria,
    now: datetime | None = None,
) -> list[QueueEntry]:
    """Return the annotated merge queue for the given criteria.

    Args:
        store: Issue store for the rig.
        criteria: Selector plus worker/epic/priority filters.
        now: Reference time for ages; defaults to the current UTC time.

    Returns:
        Queue entries in store order. An empty list is a valid result.

    Raises:
        IssueStoreError: If the base query fails.
    """
    candidates = fetch_candidates(store, criteria)
    pairs = QueueFilter.apply_filters(
        candidates, criteria, extract=store.parse_mr_fields
    )
    return QueueFilter.annotate(pairs, now or datetime.now(UTC))
