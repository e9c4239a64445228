"""MailClient: Mailer implementation backed by ``gt mail send``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mergeq.core.errors import NotificationError
from mergeq.infra.tools.command_runner import DEFAULT_TIMEOUT_SECONDS, CommandRunner

if TYPE_CHECKING:
    from pathlib import Path


class MailClient:
    """Sends worker notifications through the town's mail CLI."""

    def __init__(
        self,
        cwd: Path | None = None,
        mail_bin: str = "gt",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        runner: CommandRunner | None = None,
    ) -> None:
        self.mail_bin = mail_bin
        self._runner = runner or CommandRunner(cwd=cwd, timeout_seconds=timeout_seconds)

    def send(self, to: str, subject: str, body: str) -> None:
        """Send a message.

        Raises:
            NotificationError: If the mail command fails or times out.
        """
        result = self._runner.run(
            [self.mail_bin, "mail", "send", to, "-s", subject, "-m", body]
        )
        if not result.ok:
            raise NotificationError(f"mail to {to} failed: {result.detail()}")
