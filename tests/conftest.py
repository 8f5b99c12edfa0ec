from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from skillpack.core.skills import SkillRegistry
from skillpack.main import create_app

WriteSkill = Callable[..., Path]


def skill_text(name: str | None, description: str | None, body: str = "# Steps\n\n1. Do the thing.") -> str:
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body + "\n"


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "skills"
    directory.mkdir()
    return directory


@pytest.fixture
def write_skill(skills_dir: Path) -> WriteSkill:
    """Write a skill document into ``skills_dir`` (or ``directory``) and return its path."""

    def _write(
        filename: str,
        name: str | None,
        description: str | None = "A skill",
        body: str = "# Steps\n\n1. Do the thing.",
        directory: Path | None = None,
    ) -> Path:
        path = (directory or skills_dir) / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(skill_text(name, description, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus(write_skill: WriteSkill, skills_dir: Path) -> Path:
    """A small corpus resembling real skill packs."""
    write_skill("api-integration.md", "api-integration", "Integrate third-party REST APIs with OAuth clients")
    write_skill("caching.md", "caching", "Add a read-through layer in front of slow services")
    write_skill("migrations.md", "migrations", "Plan and run database schema changes safely")
    write_skill("grpc.md", "grpc", "Define protobuf services; avoid a stale cache of generated stubs")
    return skills_dir


@pytest.fixture
def registry(corpus: Path) -> SkillRegistry:
    return SkillRegistry.load([corpus])


@pytest.fixture
def test_client(registry: SkillRegistry) -> Generator[TestClient, None, None]:
    """Create a test client serving a pre-loaded registry."""
    with TestClient(create_app(registry=registry)) as client:
        yield client
