from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .config import AppConfig, load_config
from .container import AppContainer
from .core.exceptions import EntityNotFound
from .routers import user, version
from .security import setup_security
from .swagger import setup_swagger

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def resolve_config_path() -> Optional[Path]:
    candidate = os.environ.get("APP_CONFIG_PATH")
    if candidate:
        return Path(candidate)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


async def entity_not_found_handler(request: Request, exc: EntityNotFound) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)


def create_application(config: AppConfig | None = None) -> FastAPI:
    if config is None:
        config_path = resolve_config_path()
        config = load_config(config_path)
        logger.info("Configuration loaded from %s", config_path or "environment")
    container = AppContainer.build(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await container.startup(app)
        try:
            yield
        finally:
            await container.shutdown(app)

    app = FastAPI(
        title=config.app.name,
        description=config.app.description,
        version=config.app.version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    setup_security(app, config)
    app.add_exception_handler(EntityNotFound, entity_not_found_handler)

    app.include_router(version.router)
    app.include_router(user.router)

    setup_swagger(app, config)
    return app
