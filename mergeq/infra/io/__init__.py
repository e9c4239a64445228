"""I/O utilities for mergeq.

This package contains:
- config: MqConfig dataclass for configuration management
- log_output/: Console logging
"""

from mergeq.infra.io.config import ConfigurationError, MqConfig

__all__ = ["ConfigurationError", "MqConfig"]
