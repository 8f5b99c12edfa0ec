"""
Skill document parser and validator.

Parses a leading key-value front matter block + free-text body from skill
documents. The preamble is a flat list of ``key: value`` lines, optionally
fenced by ``---``; it is deliberately not YAML.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import ParseError

logger = logging.getLogger(__name__)

# Validation constants
NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
NAME_MAX_LENGTH = 64
DESCRIPTION_MAX_LENGTH = 1024

FENCE = "---"
KEY_VALUE_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9_-]*)\s*:\s*(.*)$")
CONFLICT_MARKER_PATTERN = re.compile(r"^(<{7}|>{7})(\s|$)", re.MULTILINE)

KNOWN_KEYS = frozenset({"name", "description"})


@dataclass(frozen=True)
class SkillDocument:
    """A parsed skill document."""

    name: str
    description: str
    body: str  # Free text after the front matter
    path: Path | None = None
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def validate_skill_name(name: str, strict: bool = False) -> str:
    """
    Validate a skill name.

    Rules:
    - Non-empty, single line, 1-64 characters
    - With ``strict``: lowercase letters, digits, hyphens only, starting
      with a letter, no consecutive/leading/trailing hyphens

    Args:
        name: The skill name to validate.
        strict: Enforce the slug rule.

    Returns:
        The validated name (unchanged).

    Raises:
        ParseError: If validation fails.
    """
    if not name:
        raise ParseError("Skill name is required")

    if len(name) > NAME_MAX_LENGTH:
        raise ParseError(f"Skill name must be at most {NAME_MAX_LENGTH} characters, got {len(name)}")

    if not strict:
        return name

    if "--" in name:
        raise ParseError("Skill name must not contain consecutive hyphens")

    if not NAME_PATTERN.match(name):
        raise ParseError(
            f"Skill name must be lowercase letters, digits, and hyphens, starting with a letter: {name!r}"
        )

    return name


def _validate_description(description: str) -> str:
    """Validate skill description."""
    if not description:
        raise ParseError("Skill description is required and must not be empty")

    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ParseError(
            f"Skill description must be at most {DESCRIPTION_MAX_LENGTH} characters, got {len(description)}"
        )

    return description


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1].strip()
    return value


def _parse_pairs(lines: list[str]) -> dict[str, str]:
    """Turn preamble lines into a dict, rejecting anything that isn't ``key: value``."""
    pairs: dict[str, str] = {}
    for line in lines:
        if not line.strip():
            continue
        match = KEY_VALUE_PATTERN.match(line.strip())
        if not match:
            raise ParseError(f"Malformed front matter line: {line.strip()!r}")
        key = match.group(1).lower()
        if key in pairs:
            raise ParseError(f"Front matter key {key!r} is repeated")
        pairs[key] = _unquote(match.group(2))
    return pairs


def split_front_matter(content: str) -> tuple[dict[str, str], str]:
    """
    Split a skill document into its front matter and body.

    Accepts either a fenced block:
        ---
        name: caching
        description: Add a caching layer
        ---
        # Instructions here...

    or a bare preamble terminated by the first blank line or the first
    line that is not ``key: value``:
        name: caching
        description: Add a caching layer

        # Instructions here...

    Returns:
        Tuple of (front matter dict, body).

    Raises:
        ParseError: If the fenced block is not closed or a line is malformed.
    """
    lines = content.lstrip("\ufeff").strip().splitlines()

    if lines and lines[0].strip() == FENCE:
        for index, line in enumerate(lines[1:], start=1):
            if line.strip() == FENCE:
                return _parse_pairs(lines[1:index]), "\n".join(lines[index + 1 :]).strip()
        raise ParseError("Front matter is not closed (missing second ---)")

    preamble: list[str] = []
    for line in lines:
        if not line.strip() or not KEY_VALUE_PATTERN.match(line.strip()):
            break
        preamble.append(line)

    return _parse_pairs(preamble), "\n".join(lines[len(preamble) :]).strip()


def parse_skill_document(content: str, path: Path | None = None, strict_names: bool = False) -> SkillDocument:
    """
    Parse and validate a skill document.

    Args:
        content: Full document text (front matter + body).
        path: Source file, recorded on the document and in error messages.
        strict_names: Enforce the lowercase-hyphen slug rule on names.

    Returns:
        SkillDocument with all validated fields.

    Raises:
        ParseError: If parsing or validation fails.
    """
    try:
        if CONFLICT_MARKER_PATTERN.search(content):
            raise ParseError("Document contains unresolved merge conflict markers")

        front_matter, body = split_front_matter(content)

        if "name" not in front_matter:
            raise ParseError("Front matter must include 'name'")
        name = validate_skill_name(front_matter["name"], strict=strict_names)

        description = _validate_description(front_matter.get("description", ""))

        if not body:
            raise ParseError("Skill document must have content after the front matter")
    except ParseError as e:
        if path is None or e.path is not None:
            raise
        raise ParseError(e.reason, path=path) from None

    # Extra front matter keys are kept as metadata.
    metadata = {k: v for k, v in front_matter.items() if k not in KNOWN_KEYS}

    logger.debug("Parsed skill %r from %s", name, path or "<string>")
    return SkillDocument(
        name=name,
        description=description,
        body=body,
        path=path,
        metadata=MappingProxyType(metadata),
    )


__all__ = [
    "SkillDocument",
    "parse_skill_document",
    "split_front_matter",
    "validate_skill_name",
]
