"""Terminal and JSON rendering for mergeq commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from tabulate import tabulate

from mergeq.core.models import DerivedStatus
from mergeq.infra.io.log_output.console import Colors, colorize, truncate_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mergeq.core.models import QueueEntry, RejectionResult

# Display width for issue IDs in the queue table
ID_WIDTH = 12

TABLE_HEADERS = ["ID", "STATUS", "PRI", "BRANCH", "WORKER", "AGE"]

_STATUS_STYLES: dict[str, tuple[str, str]] = {
    DerivedStatus.READY.value: ("ready", Colors.GREEN),
    DerivedStatus.IN_PROGRESS.value: ("active", Colors.YELLOW),
    DerivedStatus.BLOCKED.value: ("blocked", Colors.MUTED),
    DerivedStatus.CLOSED.value: ("closed", Colors.MUTED),
    DerivedStatus.REJECTED.value: ("rejected", Colors.RED),
}


def format_status(status: str) -> str:
    """Status label with color; in_progress is shown as ``active``."""
    label, color = _STATUS_STYLES.get(status, (status, ""))
    return colorize(label, color) if color else label


def format_priority(priority: int) -> str:
    """P<n> label; P0/P1 red, P2 yellow."""
    label = f"P{priority}"
    if priority <= 1:
        return colorize(label, Colors.RED)
    if priority == 2:
        return colorize(label, Colors.YELLOW)
    return label


def format_json(data: Any) -> str:  # noqa: ANN401
    return json.dumps(data, indent=2)


def queue_to_json(entries: Sequence[QueueEntry]) -> str:
    return format_json([entry.to_dict() for entry in entries])


def rejection_to_json(result: RejectionResult) -> str:
    return format_json(result.to_dict())


def queue_table(entries: Sequence[QueueEntry]) -> str:
    """Render queue entries as a table."""
    rows = [
        [
            truncate_text(entry.issue.id, ID_WIDTH),
            format_status(entry.display_status),
            format_priority(entry.issue.priority),
            entry.branch,
            entry.worker,
            colorize(entry.age, Colors.MUTED),
        ]
        for entry in entries
    ]
    return tabulate(
        rows,
        headers=TABLE_HEADERS,
        tablefmt="simple",
        colalign=("left", "left", "left", "left", "left", "right"),
    )


def blocker_lines(entries: Sequence[QueueEntry]) -> list[str]:
    """One ``<id>: waiting on <blocker>`` line per blocked entry with known blockers."""
    lines: list[str] = []
    for entry in entries:
        if entry.status != DerivedStatus.BLOCKED or not entry.issue.blocked_by:
            continue
        display_id = truncate_text(entry.issue.id, ID_WIDTH)
        lines.append(
            colorize(
                f"{display_id}: waiting on {entry.issue.blocked_by[0]}", Colors.MUTED
            )
        )
    return lines


def render_queue(rig: str, entries: Sequence[QueueEntry]) -> str:
    """Full human-readable queue listing."""
    out = [f"{Colors.BOLD}📋{Colors.RESET} Merge queue for '{rig}':", ""]
    if not entries:
        out.append("  " + colorize("(empty)", Colors.MUTED))
        return "\n".join(out)
    out.append(queue_table(entries))
    out.extend(f"  {line}" for line in blocker_lines(entries))
    return "\n".join(out)


def render_rejection(result: RejectionResult, notify: bool) -> str:
    """Human-readable summary of a rejection."""
    out = [
        f"{Colors.BOLD}✗{Colors.RESET} Rejected: {result.branch or result.mr_id}",
        f"  Worker: {result.worker}",
        f"  Reason: {result.reason}",
    ]
    if result.issue_id:
        out.append(
            f"  Issue:  {result.issue_id} "
            + colorize("(not closed - work not done)", Colors.MUTED)
        )
    if notify:
        if result.notified:
            out.append("  " + colorize("Worker notified via mail", Colors.MUTED))
        else:
            out.append("  " + colorize("Worker notification failed", Colors.YELLOW))
    return "\n".join(out)
