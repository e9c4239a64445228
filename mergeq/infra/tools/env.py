"""Environment configuration and loading for mergeq.

Centralizes config paths and dotenv loading.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# User config directory (stores .env)
USER_CONFIG_DIR = Path.home() / ".config" / "mergeq"


def load_user_env() -> None:
    """Load environment from ${USER_CONFIG_DIR}/.env (~/.config/mergeq/.env).

    Existing environment variables take precedence.
    """
    load_dotenv(dotenv_path=USER_CONFIG_DIR / ".env")


def beads_env(rig_path: Path) -> dict[str, str]:
    """Return a copy of the environment with BEADS_DIR pointing at the rig's store."""
    env = os.environ.copy()
    beads_dir = rig_path / ".beads"
    if beads_dir.is_dir():
        env["BEADS_DIR"] = str(beads_dir)
    return env
