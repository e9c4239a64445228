"""Protocol definitions for the collaborators mergeq depends on.

The queue logic only talks to an issue store and, for rejection
notifications, a mailer. BeadsClient and MailClient conform to these
protocols; tests use the in-memory fakes in tests/fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mergeq.core.models import Issue, ListOptions, MRFields


@runtime_checkable
class IssueStore(Protocol):
    """Read and update access to the issue store backing a rig."""

    def list_issues(self, options: ListOptions) -> list[Issue]:
        """Return issues matching type, status and priority, in store order."""
        ...

    def ready(self) -> list[Issue]:
        """Return issues of any type with no unresolved blockers."""
        ...

    def parse_mr_fields(self, issue: Issue) -> MRFields | None:
        """Extract MR fields from an issue, or None if it carries none."""
        ...

    def resolve_mr(self, id_or_branch: str) -> Issue:
        """Resolve an MR by issue ID, falling back to branch name.

        Raises:
            MRNotFoundError: If nothing matches or the match is not an MR.
        """
        ...

    def update_status(self, issue_id: str, status: str, reason: str = "") -> None:
        """Set an issue's status, recording reason as a note.

        Raises:
            InvalidTransitionError: If the store refuses the change.
            IssueStoreError: On any other store failure.
        """
        ...


@runtime_checkable
class Mailer(Protocol):
    """Delivers notification mail to workers."""

    def send(self, to: str, subject: str, body: str) -> None:
        """Send a message.

        Raises:
            NotificationError: If delivery failed.
        """
        ...
