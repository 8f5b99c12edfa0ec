"""
Skills API Handlers.

Read-only endpoints over the loaded skill registry:
- GET    /v1/skills              — List skill summaries
- GET    /v1/skills/search       — Search skills by intent
- GET    /v1/skills/catalog      — Prompt catalog text
- GET    /v1/skills/{name}       — Get full skill document
- GET    /v1/skills/{name}/prompt — Skill prompt for a query
- POST   /v1/skills/parse        — Validate a skill document (preview, no register)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel

from skillpack.core.skills import ParseError, SkillDocument, SkillRegistry, parse_skill_document

router = APIRouter(tags=["skills"])
logger = logging.getLogger(__name__)


class SkillSummary(BaseModel):
    name: str
    description: str


class SkillRead(BaseModel):
    """Full skill document."""

    name: str
    description: str
    body: str
    path: str | None = None
    metadata: dict[str, str] = {}

    @classmethod
    def from_document(cls, document: SkillDocument) -> "SkillRead":
        return cls(
            name=document.name,
            description=document.description,
            body=document.body,
            path=str(document.path) if document.path else None,
            metadata=dict(document.metadata),
        )


class SkillCatalog(BaseModel):
    count: int
    catalog: str


class SkillPrompt(BaseModel):
    name: str
    prompt: str


class SkillParseRequest(BaseModel):
    """Request body for skill document parse/validation."""

    content: str
    strict_names: bool = False


class SkillParseResponse(BaseModel):
    """Response from skill document parse/validation."""

    valid: bool
    name: str | None = None
    description: str | None = None
    error: str | None = None


def get_registry(request: Request) -> SkillRegistry:
    """Registry loaded at startup and stored on ``app.state``."""
    registry: SkillRegistry | None = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Skill registry is not loaded")
    return registry


def _summary(document: SkillDocument) -> SkillSummary:
    return SkillSummary(name=document.name, description=document.description)


@router.get("", response_model=list[SkillSummary])
async def list_skills(registry: SkillRegistry = Depends(get_registry)) -> list[SkillSummary]:
    """List every loaded skill in load order."""
    return [_summary(document) for document in registry.values()]


@router.get("/search", response_model=list[SkillSummary])
async def search_skills(
    q: str = Query(..., description="Free-text intent, matched against name and description"),
    limit: int | None = Query(default=None, ge=1),
    registry: SkillRegistry = Depends(get_registry),
) -> list[SkillSummary]:
    """Search skills, exact name matches first."""
    return [_summary(document) for document in registry.search(q, limit=limit)]


@router.get("/catalog", response_model=SkillCatalog)
async def get_catalog(registry: SkillRegistry = Depends(get_registry)) -> SkillCatalog:
    return SkillCatalog(count=len(registry), catalog=registry.render_catalog())


@router.post("/parse", response_model=SkillParseResponse)
async def parse_skill(body: SkillParseRequest) -> SkillParseResponse:
    """
    Validate a skill document without registering it. Returns parsed metadata or error.
    """
    try:
        parsed = parse_skill_document(body.content, strict_names=body.strict_names)
    except ParseError as e:
        logger.debug("Rejected skill document: %s", e)
        return SkillParseResponse(valid=False, error=str(e))
    return SkillParseResponse(valid=True, name=parsed.name, description=parsed.description)


@router.get("/{name}", response_model=SkillRead)
async def get_skill(name: str, registry: SkillRegistry = Depends(get_registry)) -> SkillRead:
    """Get a skill by exact name. A miss is answered with 404 by the app-level handler."""
    return SkillRead.from_document(registry.get(name))


@router.get("/{name}/prompt", response_model=SkillPrompt)
async def get_skill_prompt(
    name: str,
    query: str = Query(..., description="Task the agent should solve with this skill"),
    registry: SkillRegistry = Depends(get_registry),
) -> SkillPrompt:
    return SkillPrompt(name=name, prompt=registry.render_skill_prompt(name, query))
