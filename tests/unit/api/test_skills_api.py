"""Tests for the read-only skills API."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from skillpack.configs import RegistryConfig
from skillpack.core.skills import SkillRegistry
from skillpack.main import create_app


@pytest_asyncio.fixture
async def async_client(registry: SkillRegistry) -> AsyncGenerator[AsyncClient, None]:
    """Async client over a pre-loaded registry (lifespan is not run by ASGITransport)."""
    app = create_app(registry=registry)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestListAndGet:
    def test_list_skills(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills")

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["api-integration", "caching", "grpc", "migrations"]

    def test_get_skill(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills/caching")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "caching"
        assert data["body"].startswith("# Steps")
        assert data["path"].endswith("caching.md")
        assert data["metadata"] == {}

    def test_get_missing_skill_returns_404(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills/kubernetes")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "skill.not_found"

    def test_health(self, test_client: TestClient) -> None:
        assert test_client.get("/health").json() == {"status": "ok", "skills": 4}


class TestSearch:
    def test_search_orders_by_relevance(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills/search", params={"q": "cache"})

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["caching", "grpc"]

    def test_search_limit(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills/search", params={"q": "cache", "limit": 1})

        assert [s["name"] for s in response.json()] == ["caching"]

    def test_search_requires_query(self, test_client: TestClient) -> None:
        assert test_client.get("/v1/skills/search").status_code == 422

    def test_search_no_match(self, test_client: TestClient) -> None:
        assert test_client.get("/v1/skills/search", params={"q": "kubernetes"}).json() == []


class TestPrompts:
    def test_catalog(self, test_client: TestClient) -> None:
        data = test_client.get("/v1/skills/catalog").json()

        assert data["count"] == 4
        assert "- grpc (" in data["catalog"]

    def test_skill_prompt(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills/caching/prompt", params={"query": "Speed up search"})

        assert response.status_code == 200
        assert "Speed up search" in response.json()["prompt"]

    def test_skill_prompt_missing_skill(self, test_client: TestClient) -> None:
        response = test_client.get("/v1/skills/kubernetes/prompt", params={"query": "x"})

        assert response.status_code == 404


class TestParse:
    def test_parse_valid_document(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/v1/skills/parse",
            json={"content": "---\nname: caching\ndescription: Cache things\n---\n# Steps"},
        )

        assert response.json() == {"valid": True, "name": "caching", "description": "Cache things", "error": None}

    def test_parse_invalid_document(self, test_client: TestClient) -> None:
        response = test_client.post("/v1/skills/parse", json={"content": "---\ndescription: x\n---\nbody"})

        data = response.json()
        assert data["valid"] is False
        assert "name" in data["error"]

    def test_parse_strict_names(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/v1/skills/parse",
            json={"content": "name: Not A Slug\ndescription: x\n\nbody", "strict_names": True},
        )

        assert response.json()["valid"] is False


class TestLifespan:
    def test_registry_loaded_from_config_on_startup(self, corpus: Path) -> None:
        app = create_app(registry_config=RegistryConfig(Paths=[str(corpus)]))

        with TestClient(app) as client:
            assert client.get("/health").json()["skills"] == 4
            assert isinstance(app.state.registry, SkillRegistry)

    def test_registry_not_loaded_returns_503(self) -> None:
        client = TestClient(create_app())  # no context manager: lifespan does not run

        assert client.get("/v1/skills").status_code == 503

    def test_startup_fails_on_duplicate_names(self, write_skill, skills_dir: Path) -> None:
        write_skill("a.md", "caching", "First")
        write_skill("b.md", "caching", "Second")
        app = create_app(registry_config=RegistryConfig(Paths=[str(skills_dir)]))

        with pytest.raises(Exception):
            with TestClient(app):
                pass


async def test_async_client_get_skill(async_client: AsyncClient) -> None:
    response = await async_client.get("/v1/skills/grpc")

    assert response.status_code == 200
    assert response.json()["name"] == "grpc"
