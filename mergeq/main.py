#!/usr/bin/env python3
"""
mergeq: merge queue inspection for beads-tracked rigs.

This module is a thin shim that exposes the CLI app from mergeq.cli.cli.

Usage:
    mergeq list RIG [OPTIONS]
    mergeq reject RIG ID_OR_BRANCH --reason TEXT [--notify]
"""

from .cli.cli import bootstrap

# Call bootstrap at module import time so the console entrypoint
# (mergeq.main:app) sees ~/.config/mergeq/.env before reading config
bootstrap()

from .cli.cli import app  # noqa: E402

if __name__ == "__main__":
    app()
