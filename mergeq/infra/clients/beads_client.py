"""BeadsClient: IssueStore implementation backed by the bd CLI.

Every call shells out to ``bd ... --json`` in the rig directory and parses
the JSON output into Issue records. Failures raise IssueStoreError (or a
subclass) carrying bd's error text; nothing is retried here.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from mergeq.core.errors import (
    InvalidTransitionError,
    IssueNotFoundError,
    IssueStoreError,
    MRNotFoundError,
)
from mergeq.core.models import Issue, ListOptions, NO_PRIORITY_FILTER
from mergeq.domain.mr_fields import extract_mr_fields
from mergeq.infra.tools.command_runner import (
    DEFAULT_TIMEOUT_SECONDS,
    CommandResult,
    CommandRunner,
)
from mergeq.infra.tools.env import beads_env

if TYPE_CHECKING:
    from pathlib import Path

    from mergeq.core.models import MRFields

logger = logging.getLogger(__name__)

# Substrings in bd error output that identify specific failures
_NOT_FOUND_MARKERS = ("not found", "no issue", "no such issue")
_TRANSITION_MARKERS = ("invalid status", "cannot transition", "already closed")


def _matches(detail: str, markers: tuple[str, ...]) -> bool:
    normalized = detail.lower()
    return any(marker in normalized for marker in markers)


class BeadsClient:
    """Client for a rig's beads store via the bd CLI."""

    def __init__(
        self,
        repo_path: Path,
        bd_bin: str = "bd",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        runner: CommandRunner | None = None,
    ) -> None:
        """Initialize BeadsClient.

        Args:
            repo_path: Rig directory containing the .beads store.
            bd_bin: bd executable name or path.
            timeout_seconds: Timeout for each bd call.
            runner: Command runner override (tests).
        """
        self.repo_path = repo_path
        self.bd_bin = bd_bin
        self._runner = runner or CommandRunner(
            cwd=repo_path,
            timeout_seconds=timeout_seconds,
            env=beads_env(repo_path),
        )

    def _run(self, args: list[str]) -> CommandResult:
        return self._runner.run([self.bd_bin, *args])

    def _run_json(self, args: list[str]) -> list[dict[str, Any]]:
        """Run a bd command with --json and return its objects.

        Raises:
            IssueStoreError: If bd fails or prints invalid JSON.
        """
        cmd = list(args)
        if "--json" not in cmd:
            cmd.append("--json")
        result = self._run(cmd)
        if not result.ok:
            raise IssueStoreError(f"bd {args[0]} failed: {result.detail()}")
        raw = result.stdout.strip()
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise IssueStoreError(
                f"bd {args[0]} returned invalid JSON: {exc}"
            ) from exc
        if isinstance(payload, list):
            return [item for item in payload if isinstance(item, dict)]
        if isinstance(payload, dict):
            return [payload]
        return []

    def _to_issues(self, records: list[dict[str, Any]]) -> list[Issue]:
        issues: list[Issue] = []
        for record in records:
            try:
                issues.append(Issue.from_dict(record))
            except ValueError as exc:
                logger.warning("Skipping malformed bd record: %s", exc)
        return issues

    def list_issues(self, options: ListOptions) -> list[Issue]:
        """List issues by type, status and priority.

        An empty status lists every status; NO_PRIORITY_FILTER skips the
        priority flag entirely.
        """
        args = ["list", "--limit", "0"]
        if options.type:
            args.extend(["--type", options.type])
        if options.status:
            args.extend(["--status", options.status])
        if options.priority != NO_PRIORITY_FILTER:
            args.extend(["--priority", str(options.priority)])
        return self._to_issues(self._run_json(args))

    def ready(self) -> list[Issue]:
        """List issues of every type that have no open blockers."""
        return self._to_issues(self._run_json(["ready", "--limit", "0"]))

    def show(self, issue_id: str) -> Issue:
        """Fetch a single issue.

        Raises:
            IssueNotFoundError: If bd does not know the ID.
            IssueStoreError: On any other bd failure.
        """
        result = self._run(["show", issue_id, "--json"])
        if not result.ok:
            detail = result.detail()
            if _matches(detail, _NOT_FOUND_MARKERS):
                raise IssueNotFoundError(issue_id)
            raise IssueStoreError(f"bd show {issue_id} failed: {detail}")
        try:
            payload = json.loads(result.stdout or "null")
        except json.JSONDecodeError as exc:
            raise IssueStoreError(f"bd show returned invalid JSON: {exc}") from exc
        if isinstance(payload, list):
            payload = payload[0] if payload else None
        if not isinstance(payload, dict):
            raise IssueNotFoundError(issue_id)
        return Issue.from_dict(payload)

    def parse_mr_fields(self, issue: Issue) -> MRFields | None:
        return extract_mr_fields(issue)

    def find_mr_by_branch(self, branch: str) -> Issue | None:
        """Find the first merge request whose branch field equals branch."""
        for issue in self.list_issues(ListOptions(status="")):
            fields = self.parse_mr_fields(issue)
            if fields is not None and fields.branch == branch:
                return issue
        return None

    def resolve_mr(self, id_or_branch: str) -> Issue:
        """Resolve an MR by issue ID first, then by branch name.

        Raises:
            MRNotFoundError: If neither lookup finds a merge request.
            IssueStoreError: If bd itself fails.
        """
        try:
            issue = self.show(id_or_branch)
        except IssueNotFoundError:
            issue = None
        if issue is not None:
            if not issue.is_merge_request:
                raise MRNotFoundError(
                    id_or_branch,
                    f"{issue.id} is a {issue.type or 'untyped'} issue, "
                    "not a merge request",
                )
            return issue

        issue = self.find_mr_by_branch(id_or_branch)
        if issue is None:
            raise MRNotFoundError(id_or_branch)
        return issue

    def update_status(self, issue_id: str, status: str, reason: str = "") -> None:
        """Set an issue's status, recording reason in its notes.

        Raises:
            IssueNotFoundError: If bd does not know the ID.
            InvalidTransitionError: If bd refuses the status change.
            IssueStoreError: On any other bd failure.
        """
        args = ["update", issue_id, "--status", status]
        if reason:
            args.extend(["--notes", f"{status.capitalize()}: {reason}"])
        result = self._run(args)
        if result.ok:
            return
        detail = result.detail()
        if _matches(detail, _NOT_FOUND_MARKERS):
            raise IssueNotFoundError(issue_id)
        if _matches(detail, _TRANSITION_MARKERS):
            raise InvalidTransitionError(issue_id, "unknown", status, detail=detail)
        raise IssueStoreError(f"bd update {issue_id} failed: {detail}")
