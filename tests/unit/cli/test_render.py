"""Unit tests for queue and rejection rendering."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest

from mergeq.core.models import DerivedStatus, MRFields, QueueEntry, RejectionResult
from mergeq.cli.render import (
    blocker_lines,
    format_priority,
    format_status,
    queue_table,
    queue_to_json,
    rejection_to_json,
    render_queue,
    render_rejection,
)
from mergeq.infra.io.log_output.console import Colors, set_verbose
from tests.fakes import make_mr

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _quiet() -> Iterator[None]:
    set_verbose(False)
    yield
    set_verbose(False)


def _entry(
    issue_id: str = "gt-mr-1",
    status: DerivedStatus | str = DerivedStatus.READY,
    age: str = "5m",
    **kwargs: object,
) -> QueueEntry:
    issue = make_mr(issue_id, worker="Nux", branch="polecat/Nux/gt-xyz", **kwargs)
    fields = MRFields(branch="polecat/Nux/gt-xyz", worker="Nux", target="main")
    return QueueEntry(issue=issue, fields=fields, status=status, age=age)


class TestFormatting:
    def test_in_progress_is_shown_as_active(self) -> None:
        assert "active" in format_status("in_progress")

    def test_ready_is_green(self) -> None:
        assert format_status("ready").startswith(Colors.GREEN)

    def test_unknown_status_passes_through(self) -> None:
        assert format_status("deferred") == "deferred"

    @pytest.mark.parametrize(
        ("priority", "color"),
        [(0, Colors.RED), (1, Colors.RED), (2, Colors.YELLOW)],
    )
    def test_urgent_priorities_are_colored(self, priority: int, color: str) -> None:
        assert format_priority(priority) == f"{color}P{priority}{Colors.RESET}"

    def test_low_priority_is_plain(self) -> None:
        assert format_priority(4) == "P4"


class TestQueueTable:
    def test_headers_and_row(self) -> None:
        table = queue_table([_entry()])
        for header in ("ID", "STATUS", "PRI", "BRANCH", "WORKER", "AGE"):
            assert header in table
        assert "gt-mr-1" in table
        assert "polecat/Nux/gt-xyz" in table
        assert "5m" in table

    def test_long_ids_are_truncated(self) -> None:
        table = queue_table([_entry("gt-mr-abcdefghijkl")])
        assert "gt-mr-abcdef" in table
        assert "gt-mr-abcdefg" not in table

    def test_verbose_shows_full_ids(self) -> None:
        set_verbose(True)
        assert "gt-mr-abcdefghijkl" in queue_table([_entry("gt-mr-abcdefghijkl")])

    def test_entry_without_fields(self) -> None:
        entry = QueueEntry(issue=make_mr("mr-bare"), fields=None, status="open", age="?")
        assert "mr-bare" in queue_table([entry])


class TestRenderQueue:
    def test_empty_queue(self) -> None:
        out = render_queue("gastown", [])
        assert "Merge queue for 'gastown':" in out
        assert "(empty)" in out

    def test_blocked_entries_list_first_blocker(self) -> None:
        entry = _entry(status=DerivedStatus.BLOCKED, blocked_by=("gt-a", "gt-b"))
        assert blocker_lines([entry]) == [
            f"{Colors.MUTED}gt-mr-1: waiting on gt-a{Colors.RESET}"
        ]
        assert "waiting on gt-a" in render_queue("gastown", [entry])

    def test_ready_entries_have_no_blocker_lines(self) -> None:
        assert blocker_lines([_entry()]) == []


class TestJson:
    def test_queue_json_keeps_store_fields(self) -> None:
        (data,) = json.loads(queue_to_json([_entry(priority=1)]))
        assert data["id"] == "gt-mr-1"
        assert data["issue_type"] == "merge-request"
        assert data["priority"] == 1
        assert data["display_status"] == "ready"
        assert data["age"] == "5m"
        assert data["mr_fields"]["worker"] == "Nux"

    def test_empty_queue_json(self) -> None:
        assert json.loads(queue_to_json([])) == []

    def test_rejection_json(self) -> None:
        result = RejectionResult("b", "Nux", "gt-xyz", "mr-1", "Superseded", True)
        assert json.loads(rejection_to_json(result)) == {
            "branch": "b",
            "worker": "Nux",
            "issue_id": "gt-xyz",
            "mr_id": "mr-1",
            "reason": "Superseded",
            "notified": True,
        }


class TestRenderRejection:
    def test_summary_lines(self) -> None:
        result = RejectionResult(
            "polecat/Nux/gt-xyz", "Nux", "gt-xyz", "mr-1", "Does not build"
        )
        out = render_rejection(result, notify=False)
        assert "Rejected: polecat/Nux/gt-xyz" in out
        assert "Worker: Nux" in out
        assert "Reason: Does not build" in out
        assert "not closed - work not done" in out
        assert "notified" not in out

    def test_falls_back_to_mr_id_without_branch(self) -> None:
        out = render_rejection(RejectionResult("", "", "", "mr-1", "x"), notify=False)
        assert "Rejected: mr-1" in out
        assert "Issue:" not in out

    def test_notification_outcome(self) -> None:
        sent = RejectionResult("b", "Nux", "", "mr-1", "x", notified=True)
        failed = RejectionResult("b", "Nux", "", "mr-1", "x", notified=False)
        assert "Worker notified via mail" in render_rejection(sent, notify=True)
        assert "Worker notification failed" in render_rejection(failed, notify=True)
