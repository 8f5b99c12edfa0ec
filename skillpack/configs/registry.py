"""Skill registry loading configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RegistryConfig(BaseModel):
    """Where skill documents live and how strictly they are loaded."""

    Paths: list[str] = Field(
        default_factory=lambda: ["skills"],
        description="Directories scanned (non-recursively) for skill documents",
    )
    FilePattern: str = Field(
        default="*.md",
        description="Glob pattern selecting document files inside each directory",
    )
    IncludeSkillFolders: bool = Field(
        default=False,
        description="Also read <dir>/<child>/SKILL.md, one level deep",
    )
    DuplicatePolicy: Literal["raise", "replace"] = Field(
        default="raise",
        description="On a repeated skill name: raise DuplicateNameError, or let the later path win",
    )
    StrictNames: bool = Field(
        default=False,
        description="Require lowercase-hyphen slug names (e.g. api-integration)",
    )
    Encoding: str = Field(default="utf-8", description="Text encoding of skill documents")
    MaxFileBytes: int = Field(
        default=1024 * 1024,
        description="Documents larger than this are rejected",
    )
