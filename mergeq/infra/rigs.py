"""Rig resolution: map a rig name to the directory holding its beads store.

A town root may contain a ``rigs.yaml`` registry::

    rigs:
      gastown:
        path: gastown/mayor/rig
      beads: /abs/path/to/beads

Relative paths are resolved against the town root. Rigs missing from the
registry (or when there is no registry) resolve to ``<town_root>/<rig>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mergeq.core.errors import RigNotFoundError
from mergeq.infra.io.config import ConfigurationError

logger = logging.getLogger(__name__)

RIGS_FILE_NAME = "rigs.yaml"


@dataclass(frozen=True)
class Rig:
    """A named workspace with its own merge queue."""

    name: str
    path: Path


def _entry_path(name: str, entry: Any) -> str:  # noqa: ANN401
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict) and isinstance(entry.get("path"), str):
        return entry["path"]
    raise ConfigurationError([f"{RIGS_FILE_NAME}: rig '{name}' has no path"])


def load_rig_registry(town_root: Path) -> dict[str, Path]:
    """Load rigs.yaml from the town root.

    Returns:
        Mapping of rig name to absolute path; empty if there is no registry.

    Raises:
        ConfigurationError: If the file is not valid YAML or malformed.
    """
    rigs_file = town_root / RIGS_FILE_NAME
    if not rigs_file.exists():
        return {}
    try:
        data = yaml.safe_load(rigs_file.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError([f"{rigs_file}: invalid YAML ({exc})"]) from exc
    rigs = data.get("rigs") if isinstance(data, dict) else None
    if rigs is None:
        return {}
    if not isinstance(rigs, dict):
        raise ConfigurationError([f"{rigs_file}: 'rigs' must be a mapping"])

    registry: dict[str, Path] = {}
    for name, entry in rigs.items():
        path = Path(_entry_path(str(name), entry)).expanduser()
        registry[str(name)] = path if path.is_absolute() else town_root / path
    return registry


def resolve_rig(name: str, town_root: Path) -> Rig:
    """Resolve a rig name to its directory.

    Raises:
        RigNotFoundError: If the name is blank or the directory does not exist.
        ConfigurationError: If rigs.yaml is malformed.
    """
    if not name.strip():
        raise RigNotFoundError(name, str(town_root))
    registry = load_rig_registry(town_root)
    path = registry.get(name, town_root / name)
    if not path.is_dir():
        raise RigNotFoundError(name, str(path))
    logger.debug("Resolved rig %s to %s", name, path)
    return Rig(name=name, path=path)
