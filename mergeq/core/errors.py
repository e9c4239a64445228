"""Exception hierarchy for mergeq.

Errors are raised where they are detected and propagated to the CLI, which
prints them and exits non-zero. Only timestamp parsing and notification
delivery recover locally.
"""

from __future__ import annotations


class MergeQueueError(Exception):
    """Base class for all mergeq errors."""


class ValidationError(MergeQueueError):
    """Raised when caller input is invalid, before any store call is made."""


class IssueStoreError(MergeQueueError):
    """Raised when the issue store fails or returns unusable output."""


class IssueNotFoundError(IssueStoreError):
    """Raised when an identifier does not resolve to an issue."""

    def __init__(self, identifier: str, message: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message or f"issue not found: {identifier}")


class MRNotFoundError(IssueNotFoundError):
    """Raised when an ID or branch does not resolve to a merge request."""

    def __init__(self, identifier: str, message: str | None = None) -> None:
        super().__init__(
            identifier, message or f"merge request not found: {identifier}"
        )


class InvalidTransitionError(IssueStoreError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(
        self,
        issue_id: str,
        current: str,
        target: str,
        detail: str = "",
        message: str | None = None,
    ) -> None:
        self.issue_id = issue_id
        self.current = current
        self.target = target
        self.detail = detail
        text = f"cannot move {issue_id} from '{current}' to '{target}'"
        if detail:
            text = f"{text}: {detail}"
        super().__init__(message or text)


class NotificationError(MergeQueueError):
    """Raised by a mailer when a notification could not be delivered."""


class RigNotFoundError(MergeQueueError):
    """Raised when a rig name cannot be resolved to a workspace."""

    def __init__(self, rig: str, searched: str) -> None:
        self.rig = rig
        super().__init__(f"rig '{rig}' not found (looked in {searched})")
