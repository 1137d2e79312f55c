"""Configuration management for changelogger."""

from __future__ import annotations

from changelogger.config.loader import load_config
from changelogger.config.models import ChangeloggerConfig

__all__ = [
    "ChangeloggerConfig",
    "load_config",
]
