"""SkillPack: load agent skill documents into a read-only registry."""

from skillpack.core.skills import (
    DuplicateNameError,
    NotFoundError,
    ParseError,
    SkillDocument,
    SkillRegistry,
    SkillRegistryError,
)

__version__ = "0.1.0"

__all__ = [
    "DuplicateNameError",
    "NotFoundError",
    "ParseError",
    "SkillDocument",
    "SkillRegistry",
    "SkillRegistryError",
]
