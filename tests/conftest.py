"""Pytest configuration for mergeq tests."""

import os
from pathlib import Path

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure test environment before collection.

    Points MERGEQ_TOWN_ROOT at a scratch directory so tests never resolve
    rigs from the developer's real workspace.
    """
    test_town = Path("/tmp/mergeq-test-town")
    test_town.mkdir(parents=True, exist_ok=True)
    os.environ["MERGEQ_TOWN_ROOT"] = str(test_town)
    os.environ.pop("MERGEQ_COMMAND_TIMEOUT", None)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration", "e2e")):
            continue
        item.add_marker(pytest.mark.unit)
