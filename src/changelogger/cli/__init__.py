"""Command line interface for changelogger."""

from __future__ import annotations

from changelogger.cli.app import app, main

__all__ = ["app", "main"]
