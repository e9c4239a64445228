"""In-memory fake implementations for testing.

Fakes are preferred over mocks because they:

1. Implement real protocol contracts, catching interface mismatches at test time
2. Provide deterministic, predictable behavior without call-order dependencies
3. Enable behavior-based testing (assert outputs/state) over interaction testing

Available fakes:
- FakeIssueStore: In-memory issue storage implementing IssueStore
- FakeMailer: Records sent mail, optionally failing delivery
- FakeCommandRunner: Scripted command results keyed by argv prefix

Usage:
    from tests.fakes import FakeIssueStore, make_mr

    def test_something():
        store = FakeIssueStore([make_mr("mr-1", worker="Nux")])
        # test code that uses store
"""

from tests.fakes.command_runner import FakeCommandRunner
from tests.fakes.issue_store import FakeIssueStore, make_issue, make_mr
from tests.fakes.mailer import FakeMailer

__all__ = [
    "FakeCommandRunner",
    "FakeIssueStore",
    "FakeMailer",
    "make_issue",
    "make_mr",
]
