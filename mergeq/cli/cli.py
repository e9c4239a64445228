#!/usr/bin/env python3
"""
mergeq CLI: inspect and manage a rig's merge queue.

Usage:
    mergeq list RIG [--status S | --ready] [--worker W] [--epic E] [--json]
    mergeq reject RIG ID_OR_BRANCH --reason TEXT [--notify] [--json]
"""

from __future__ import annotations

from typing import Annotated

import typer

from mergeq.core.errors import MergeQueueError, ValidationError
from mergeq.core.models import (
    NO_PRIORITY_FILTER,
    ByStatus,
    QueueCriteria,
    ReadyOnly,
    RejectRequest,
)
from mergeq.domain.rejection import validate_request
from mergeq.factory import create_merge_queue
from mergeq.infra.io.config import ConfigurationError, MqConfig
from mergeq.infra.io.log_output.console import Colors, log, set_verbose
from mergeq.infra.tools.env import load_user_env

from .render import (
    queue_to_json,
    rejection_to_json,
    render_queue,
    render_rejection,
)

# Bootstrap state: tracks whether bootstrap() has been called
_bootstrapped = False


def bootstrap() -> None:
    """Load environment variables from ~/.config/mergeq/.env.

    Idempotent: calling it more than once has no additional effect.
    """
    global _bootstrapped

    if _bootstrapped:
        return

    load_user_env()
    _bootstrapped = True


def build_criteria(
    status: str | None,
    ready: bool,
    worker: str,
    epic: str,
    priority: int,
) -> QueueCriteria:
    """Build immutable queue criteria from CLI options.

    Raises:
        ValidationError: If both --status and --ready were given.
    """
    if ready and status:
        raise ValidationError("--status and --ready cannot be combined")
    selector = ReadyOnly() if ready else ByStatus(status or "open")
    return QueueCriteria(
        selector=selector,
        worker=worker.strip(),
        epic=epic.strip(),
        priority=priority,
    )


def _fail(message: str, code: int = 1) -> typer.Exit:
    log("✗", message, Colors.RED)
    return typer.Exit(code)


app = typer.Typer(
    name="mergeq",
    help="Inspect and manage the merge queue of a rig",
    add_completion=False,
)


@app.command("list")
def list_queue(
    rig: Annotated[str, typer.Argument(help="Rig whose merge queue to show")],
    status: Annotated[
        str | None,
        typer.Option(
            "--status",
            help="Only show MRs with this raw status (default: open)",
        ),
    ] = None,
    ready: Annotated[
        bool,
        typer.Option(
            "--ready",
            help="Only show MRs with no unresolved blockers",
        ),
    ] = False,
    worker: Annotated[
        str,
        typer.Option("--worker", help="Only show MRs from this worker"),
    ] = "",
    epic: Annotated[
        str,
        typer.Option(
            "--epic",
            help="Only show MRs targeting integration/<epic>",
        ),
    ] = "",
    priority: Annotated[
        int,
        typer.Option(
            "--priority",
            help="Only show MRs with this priority (-1: any)",
        ),
    ] = NO_PRIORITY_FILTER,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full IDs and debug logging"),
    ] = False,
) -> None:
    """List merge requests in a rig's queue."""
    set_verbose(verbose)
    try:
        criteria = build_criteria(status, ready, worker, epic, priority)
    except ValidationError as exc:
        raise _fail(str(exc), code=2) from exc

    try:
        config = MqConfig.from_env()
        queue = create_merge_queue(rig, config)
        entries = queue.list_entries(criteria)
    except (MergeQueueError, ConfigurationError) as exc:
        raise _fail(f"querying merge queue: {exc}") from exc

    if json_output:
        print(queue_to_json(entries))
        return
    print(render_queue(queue.rig, entries))


@app.command("reject")
def reject(
    rig: Annotated[str, typer.Argument(help="Rig owning the merge request")],
    id_or_branch: Annotated[
        str,
        typer.Argument(help="Merge request issue ID or branch name"),
    ],
    reason: Annotated[
        str,
        typer.Option("--reason", "-r", help="Reason for rejection (required)"),
    ],
    notify: Annotated[
        bool,
        typer.Option("--notify", help="Send mail notification to worker"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Reject a merge request without merging it.

    The MR is marked rejected; its source issue is NOT closed because the
    work is not done.
    """
    set_verbose(verbose)
    try:
        validate_request(RejectRequest(id_or_branch=id_or_branch, reason=reason))
    except ValidationError as exc:
        raise _fail(str(exc), code=2) from exc

    try:
        config = MqConfig.from_env()
        queue = create_merge_queue(rig, config)
        result = queue.reject_mr(id_or_branch, reason, notify=notify)
    except (MergeQueueError, ConfigurationError) as exc:
        raise _fail(f"rejecting MR: {exc}") from exc

    if json_output:
        print(rejection_to_json(result))
        return
    print(render_rejection(result, notify))
