import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillpack.api import root_router
from skillpack.configs import RegistryConfig, configs
from skillpack.core.logger import LOGGING_CONFIG
from skillpack.core.skills import NotFoundError, SkillRegistry, SkillRegistryError

logger = logging.getLogger(__name__)


def create_app(registry: SkillRegistry | None = None, registry_config: RegistryConfig | None = None) -> FastAPI:
    """
    Build the API application.

    A pre-built ``registry`` is served as-is; otherwise one is loaded from
    ``registry_config`` (default: ``configs.Registry``) during startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if app.state.registry is None:
            config = registry_config or configs.Registry
            logger.info(f"Loading skills from: {', '.join(config.Paths)}")
            app.state.registry = SkillRegistry.load_from_config(config)

        logger.info(f"Serving {len(app.state.registry)} skill(s)")
        yield

    app = FastAPI(
        title="SkillPack Service",
        description="Read-only registry of agent skill documents",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(SkillRegistryError)
    async def skill_registry_error_handler(request: Request, exc: SkillRegistryError) -> JSONResponse:
        status_code = 404 if isinstance(exc, NotFoundError) else 422
        logger.warning(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": exc.as_dict()})

    @app.get("/health", tags=["default"])
    async def health(request: Request) -> dict[str, str | int]:
        registry: SkillRegistry | None = request.app.state.registry
        return {"status": "ok", "skills": len(registry) if registry is not None else 0}

    app.include_router(root_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "skillpack.main:app",
        host=configs.Host,
        port=configs.Port,
        log_config=LOGGING_CONFIG,
        reload=configs.Debug,
        reload_excludes=["tests"],
    )
