"""Configuration dataclass for mergeq.

MqConfig can be constructed programmatically or loaded from environment
variables (after ~/.config/mergeq/.env is loaded) via from_env().

Environment Variables:
    MERGEQ_TOWN_ROOT: Workspace root holding rigs (default: current directory)
    MERGEQ_BD_BIN: Beads CLI executable (default: bd)
    MERGEQ_MAIL_BIN: Mail CLI executable used for notifications (default: gt)
    MERGEQ_COMMAND_TIMEOUT: Timeout in seconds for bd/gt calls (default: 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from mergeq.infra.tools.command_runner import DEFAULT_TIMEOUT_SECONDS


def _safe_float(value: str | None, default: float) -> float:
    """Safely parse a float with fallback to default."""
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)


@dataclass(frozen=True)
class MqConfig:
    """Centralized configuration for mergeq.

    Attributes:
        town_root: Directory containing rigs (and optionally rigs.yaml).
            Env: MERGEQ_TOWN_ROOT (default: current directory)
        bd_bin: Beads CLI executable.
            Env: MERGEQ_BD_BIN (default: bd)
        mail_bin: Executable providing ``mail send`` for notifications.
            Env: MERGEQ_MAIL_BIN (default: gt)
        command_timeout: Timeout in seconds for each bd/gt call.
            Env: MERGEQ_COMMAND_TIMEOUT (default: 30)

    Example:
        config = MqConfig(town_root=Path("/work/town"), bd_bin="/opt/bin/bd")
        config = MqConfig.from_env()
    """

    town_root: Path = field(default_factory=Path.cwd)
    bd_bin: str = "bd"
    mail_bin: str = "gt"
    command_timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, *, validate: bool = True) -> MqConfig:
        """Create MqConfig from environment variables.

        Args:
            validate: If True (default), raise ConfigurationError on invalid
                values.

        Raises:
            ConfigurationError: If validate=True and configuration is invalid.
        """
        town_root_raw = os.environ.get("MERGEQ_TOWN_ROOT") or None
        config = cls(
            town_root=Path(town_root_raw) if town_root_raw else Path.cwd(),
            bd_bin=os.environ.get("MERGEQ_BD_BIN") or "bd",
            mail_bin=os.environ.get("MERGEQ_MAIL_BIN") or "gt",
            command_timeout=_safe_float(
                os.environ.get("MERGEQ_COMMAND_TIMEOUT"), DEFAULT_TIMEOUT_SECONDS
            ),
        )
        if validate:
            errors = config.validate()
            if errors:
                raise ConfigurationError(errors)
        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Checks:
            - command_timeout is positive
            - executables are non-empty
        """
        errors: list[str] = []
        if self.command_timeout <= 0:
            errors.append(
                f"command_timeout must be positive, got {self.command_timeout}"
            )
        if not self.bd_bin.strip():
            errors.append("bd_bin must not be empty")
        if not self.mail_bin.strip():
            errors.append("mail_bin must not be empty")
        return errors
