"""Load configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from changelogger.config.models import ChangeloggerConfig
from changelogger.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_KEY = "changelogger"


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Public helper for reading an explicit file. ``load_config`` checks
    for the file first and falls back to the defaults, so it never sees
    ConfigNotFoundError.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_changelogger_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.changelogger]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> ChangeloggerConfig:
    """Load configuration for the project at ``path``.

    Only ``path`` itself is searched, so a repository without a
    pyproject.toml gets the defaults.

    Args:
        path: Project directory, or a pyproject.toml file

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    path = path or Path.cwd()
    pyproject_path = path if path.suffix == ".toml" else path / "pyproject.toml"

    if not pyproject_path.is_file():
        logger.debug("No %s, using default configuration", pyproject_path)
        return ChangeloggerConfig()

    data = extract_changelogger_config(load_pyproject_toml(pyproject_path))
    try:
        return ChangeloggerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] configuration: {e}") from e
