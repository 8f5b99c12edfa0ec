"""Skill registry error codes and exceptions."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class SkillErrorCode(StrEnum):
    """Machine-readable error codes for skill loading and lookup.

    Format: {category}.{specific_error}
    """

    PARSE_ERROR = "skill.parse_error"
    DUPLICATE_NAME = "skill.duplicate_name"
    NOT_FOUND = "skill.not_found"
    DIRECTORY_ERROR = "skill.directory_error"

    @property
    def category(self) -> str:
        return self.value.split(".")[0]

    @property
    def recoverable(self) -> bool:
        """Whether a caller can reasonably continue after this error."""
        return self is SkillErrorCode.NOT_FOUND


class SkillRegistryError(Exception):
    """Base class for every error raised by the skill registry."""

    code: SkillErrorCode

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": str(self)}


class ParseError(SkillRegistryError, ValueError):
    """Raised when a skill document has malformed or missing metadata."""

    code = SkillErrorCode.PARSE_ERROR

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        self.reason = message
        super().__init__(f"{path}: {message}" if path else message)


class DuplicateNameError(SkillRegistryError):
    """Raised when two skill documents declare the same name."""

    code = SkillErrorCode.DUPLICATE_NAME

    def __init__(self, name: str, first_path: Path | None, second_path: Path | None) -> None:
        self.name = name
        self.first_path = first_path
        self.second_path = second_path
        super().__init__(f"Skill name {name!r} declared by both {first_path} and {second_path}")


class NotFoundError(SkillRegistryError, KeyError):
    """Raised when a skill name is not in the registry."""

    code = SkillErrorCode.NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        # KeyError would repr() the argument
        return f"Skill {self.name!r} not found"


class SkillDirectoryError(SkillRegistryError):
    """Raised when a configured skill path is missing or is not a directory."""

    code = SkillErrorCode.DIRECTORY_ERROR

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Skill path is not a directory: {path}")


__all__ = [
    "DuplicateNameError",
    "NotFoundError",
    "ParseError",
    "SkillDirectoryError",
    "SkillErrorCode",
    "SkillRegistryError",
]
