"""
Agent Skills: instruction documents for LLM agents.

Skills are NOT tools. They are prompt templates with a name, a description
and a free-text body, loaded from disk into a read-only registry.
"""

from .errors import (
    DuplicateNameError,
    NotFoundError,
    ParseError,
    SkillDirectoryError,
    SkillErrorCode,
    SkillRegistryError,
)
from .parser import SkillDocument, parse_skill_document, split_front_matter, validate_skill_name
from .registry import SkillRegistry, iter_skill_files, read_skill_file

__all__ = [
    "DuplicateNameError",
    "NotFoundError",
    "ParseError",
    "SkillDirectoryError",
    "SkillDocument",
    "SkillErrorCode",
    "SkillRegistry",
    "SkillRegistryError",
    "iter_skill_files",
    "parse_skill_document",
    "read_skill_file",
    "split_front_matter",
    "validate_skill_name",
]
