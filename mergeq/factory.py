"""Wiring of concrete collaborators into a MergeQueue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mergeq.domain.merge_queue import MergeQueue
from mergeq.infra.clients.beads_client import BeadsClient
from mergeq.infra.clients.mail_client import MailClient
from mergeq.infra.rigs import resolve_rig

if TYPE_CHECKING:
    from mergeq.infra.io.config import MqConfig


def create_merge_queue(rig_name: str, config: MqConfig) -> MergeQueue:
    """Build the merge queue for a rig using bd and gt.

    Raises:
        RigNotFoundError: If the rig cannot be resolved.
        ConfigurationError: If the rig registry is malformed.
    """
    rig = resolve_rig(rig_name, config.town_root)
    store = BeadsClient(
        rig.path, bd_bin=config.bd_bin, timeout_seconds=config.command_timeout
    )
    mailer = MailClient(
        cwd=config.town_root,
        mail_bin=config.mail_bin,
        timeout_seconds=config.command_timeout,
    )
    return MergeQueue(rig=rig.name, store=store, mailer=mailer)
