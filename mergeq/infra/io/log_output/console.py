"""Console logging helpers for mergeq.

Colored, icon-prefixed status lines for user-facing CLI output. Diagnostic
logging goes through the standard logging module instead.
"""

import logging
import sys

# Global verbose setting (can be modified at runtime)
_verbose_enabled: bool = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose output globally.

    Verbose mode also routes mergeq's diagnostic log records to stderr.
    """
    global _verbose_enabled
    _verbose_enabled = enabled
    if enabled:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logging.getLogger("mergeq").setLevel(logging.DEBUG)


def truncate_text(text: str, max_length: int) -> str:
    """Truncate text to max_length.

    Respects global verbose setting. If verbose is enabled,
    returns the original text unchanged.
    """
    if _verbose_enabled:
        return text
    if len(text) > max_length:
        return text[:max_length]
    return text


class Colors:
    """ANSI color codes for terminal output (bright variants)."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    # Subdued style for secondary info (uses gray instead of dim for visibility)
    MUTED = "\033[90m"


def colorize(text: str, color: str) -> str:
    """Wrap text in a color code and reset."""
    return f"{color}{text}{Colors.RESET}"


def log(
    icon: str,
    message: str,
    color: str = Colors.RESET,
    dim: bool = False,
) -> None:
    """Print an icon-prefixed status line."""
    style = Colors.MUTED if dim else ""
    print(f"{style}{color}{icon} {message}{Colors.RESET}")
