"""Subprocess execution with timeouts for external CLIs (bd, gt).

All calls are synchronous. A timed-out command is reported as a
CommandResult with ``timed_out=True`` and TIMEOUT_EXIT_CODE rather than
an exception, so callers decide how to surface it.
"""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

# Exit code used for timed-out commands (matches coreutils `timeout`)
TIMEOUT_EXIT_CODE = 124

# Exit code used when the executable does not exist
NOT_FOUND_EXIT_CODE = 127

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command execution."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    duration_seconds: float = 0.0
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    def detail(self) -> str:
        """Best available error text: stderr, then stdout, then exit code."""
        text = (self.stderr or self.stdout or "").strip()
        if text:
            return text
        if self.timed_out:
            return "timed out"
        return f"exit code {self.returncode}"


class CommandRunner:
    """Runs commands in a fixed working directory with a timeout."""

    def __init__(
        self,
        cwd: Path | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.cwd = cwd
        self.timeout_seconds = timeout_seconds
        self.env = dict(env) if env is not None else None

    def run(
        self, cmd: Sequence[str], timeout: float | None = None
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            cmd: Command and arguments.
            timeout: Override for self.timeout_seconds.

        Returns:
            CommandResult; never raises for non-zero exits, timeouts or a
            missing executable.
        """
        command = list(cmd)
        effective_timeout = timeout if timeout is not None else self.timeout_seconds
        start = time.monotonic()
        try:
            proc = subprocess.run(  # noqa: S603
                command,
                cwd=self.cwd,
                env=self.env,
                capture_output=True,
                text=True,
                timeout=effective_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "Command timed out after %ss: %s", effective_timeout, " ".join(command)
            )
            return CommandResult(
                command=command,
                returncode=TIMEOUT_EXIT_CODE,
                duration_seconds=time.monotonic() - start,
                timed_out=True,
            )
        except FileNotFoundError:
            return CommandResult(
                command=command,
                returncode=NOT_FOUND_EXIT_CODE,
                stderr=f"command not found: {command[0]}",
                duration_seconds=time.monotonic() - start,
            )

        result = CommandResult(
            command=command,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_seconds=time.monotonic() - start,
        )
        if not result.ok:
            logger.debug("Command failed: %s: %s", " ".join(command), result.detail())
        return result
