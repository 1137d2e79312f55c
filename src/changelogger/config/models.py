"""Configuration models.

Settings live in the ``[tool.changelogger]`` table of pyproject.toml.
Every field has a default, so the table is optional.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeloggerConfig(BaseModel):
    """Root configuration for changelogger."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    output: Path = Field(
        default=Path("CHANGELOG.md"),
        description="Changelog file, relative to the repository root",
    )
    tag_prefix: str = Field(
        default="v",
        description="Prefix of release tags, e.g. 'v' for v1.2.3",
    )
    remote: str = Field(
        default="origin",
        description="Remote used to build commit, issue and release links",
    )
    interactive: bool = Field(
        default=True,
        description="Ask for the category of commits without a known prefix",
    )

    @field_validator("remote")
    @classmethod
    def _remote_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("remote name cannot be empty")
        return value
