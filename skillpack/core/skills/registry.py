"""
Skill registry.

A registry is built once from a set of directories and is read-only
afterwards; consumers receive it explicitly (e.g. via ``app.state``) rather
than through a module-level instance.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from os import PathLike
from pathlib import Path
from types import MappingProxyType
from typing import Literal

from skillpack.configs import RegistryConfig

from .errors import DuplicateNameError, NotFoundError, ParseError, SkillDirectoryError
from .parser import SkillDocument, parse_skill_document
from .search import match_tier, normalize

logger = logging.getLogger(__name__)

SKILL_MD_FILENAME = "SKILL.md"

DuplicatePolicy = Literal["raise", "replace"]


def iter_skill_files(
    directory: Path,
    pattern: str = "*.md",
    include_skill_folders: bool = False,
) -> Iterator[Path]:
    """Yield document files directly inside ``directory`` in sorted order.

    With ``include_skill_folders``, ``<directory>/<child>/SKILL.md`` files are
    yielded after the top-level files.
    """
    if not directory.is_dir():
        raise SkillDirectoryError(directory)

    yield from sorted(p for p in directory.glob(pattern) if p.is_file())

    if include_skill_folders:
        for child in sorted(p for p in directory.iterdir() if p.is_dir()):
            candidate = child / SKILL_MD_FILENAME
            if candidate.is_file():
                yield candidate


def read_skill_file(
    path: Path,
    encoding: str = "utf-8",
    max_bytes: int | None = None,
    strict_names: bool = False,
) -> SkillDocument:
    """Read and parse one skill document from disk."""
    try:
        size = path.stat().st_size
        if max_bytes is not None and size > max_bytes:
            raise ParseError(f"Document exceeds max size {max_bytes} bytes ({size})", path=path)
        raw = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Document could not be read: {e}", path=path) from e
    try:
        content = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParseError(f"Document is not valid {encoding} text: {e}", path=path) from e
    return parse_skill_document(content, path=path, strict_names=strict_names)


class SkillRegistry(Mapping[str, SkillDocument]):
    """Ordered, immutable mapping of skill name to SkillDocument."""

    __slots__ = ("_skills",)

    def __init__(self, skills: Mapping[str, SkillDocument] | None = None) -> None:
        self._skills: Mapping[str, SkillDocument] = MappingProxyType(dict(skills or {}))

    # --- Construction ---

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[SkillDocument],
        duplicate_policy: DuplicatePolicy = "raise",
    ) -> SkillRegistry:
        """Build a registry, enforcing name uniqueness.

        With ``duplicate_policy="replace"`` the later document wins but keeps
        the position of the first one.
        """
        skills: dict[str, SkillDocument] = {}
        for document in documents:
            existing = skills.get(document.name)
            if existing is not None:
                if duplicate_policy == "raise":
                    raise DuplicateNameError(document.name, existing.path, document.path)
                logger.warning(
                    "Skill %r from %s replaces the one from %s",
                    document.name,
                    document.path,
                    existing.path,
                )
            skills[document.name] = document
        return cls(skills)

    @classmethod
    def load(
        cls,
        paths: Sequence[str | PathLike[str]],
        *,
        pattern: str = "*.md",
        include_skill_folders: bool = False,
        duplicate_policy: DuplicatePolicy = "raise",
        strict_names: bool = False,
        encoding: str = "utf-8",
        max_file_bytes: int | None = None,
    ) -> SkillRegistry:
        """
        Load every skill document found directly inside ``paths``.

        Args:
            paths: Directories to scan, in priority order (later paths win
                under the ``replace`` policy).
            pattern: Glob pattern selecting document files.
            include_skill_folders: Also read ``<dir>/<child>/SKILL.md``.
            duplicate_policy: ``raise`` or ``replace`` on a repeated name.
            strict_names: Enforce the lowercase-hyphen slug rule.
            encoding: Text encoding of the documents.
            max_file_bytes: Reject documents larger than this.

        Raises:
            SkillDirectoryError: A path is missing or not a directory.
            ParseError: A document has malformed or missing metadata.
            DuplicateNameError: Two documents share a name (``raise`` policy).
        """
        directories = [Path(p).expanduser() for p in paths]

        def _documents() -> Iterator[SkillDocument]:
            for directory in directories:
                for file_path in iter_skill_files(directory, pattern, include_skill_folders):
                    yield read_skill_file(
                        file_path,
                        encoding=encoding,
                        max_bytes=max_file_bytes,
                        strict_names=strict_names,
                    )

        registry = cls.from_documents(_documents(), duplicate_policy=duplicate_policy)
        logger.info(
            "Loaded %d skill(s) from %s",
            len(registry),
            ", ".join(str(d) for d in directories) or "<no paths>",
        )
        return registry

    @classmethod
    def load_from_config(cls, config: RegistryConfig) -> SkillRegistry:
        return cls.load(
            config.Paths,
            pattern=config.FilePattern,
            include_skill_folders=config.IncludeSkillFolders,
            duplicate_policy=config.DuplicatePolicy,
            strict_names=config.StrictNames,
            encoding=config.Encoding,
            max_file_bytes=config.MaxFileBytes,
        )

    # --- Mapping protocol ---

    def __getitem__(self, name: str) -> SkillDocument:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._skills)

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._skills)!r})"

    # --- Queries ---

    def get(self, name: str) -> SkillDocument:  # type: ignore[override]
        """Exact lookup by name.

        Unlike ``Mapping.get`` there is no default: a miss raises
        NotFoundError so callers can fall back to ``search``.
        """
        try:
            return self._skills[name]
        except KeyError:
            raise NotFoundError(name) from None

    def names(self) -> list[str]:
        return list(self._skills)

    def search(self, text: str, limit: int | None = None) -> list[SkillDocument]:
        """Find skills matching ``text`` by name or description, best first.

        Raises:
            ValueError: If ``limit`` is negative.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        query = normalize(text)
        if not query:
            return []

        ranked: list[tuple[int, int, SkillDocument]] = []
        for position, document in enumerate(self._skills.values()):
            tier = match_tier(query, document.name, document.description)
            if tier is not None:
                ranked.append((tier, position, document))

        ranked.sort(key=lambda item: (item[0], item[1]))
        results = [document for _, _, document in ranked]
        return results[:limit] if limit is not None else results

    # --- Prompt rendering ---

    def render_catalog(self) -> str:
        """One ``- name (description)`` line per skill, for system prompts."""
        return "\n".join(f"- {d.name} ({d.description})" for d in self._skills.values())

    def render_skill_prompt(self, name: str, query: str) -> str:
        """Prompt asking an agent to solve ``query`` following skill ``name``."""
        document = self.get(name)
        return (
            f"You need to solve the following query:\n{query}\n"
            f"with the instructions of the skill below:\n"
            f"Skill Name: {document.name}\n"
            f"Content:\n{document.body}\n"
        )


__all__ = [
    "SKILL_MD_FILENAME",
    "SkillRegistry",
    "iter_skill_files",
    "read_skill_file",
]
