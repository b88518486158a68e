"""
API documentation routes.

FastAPI's built-in ``/docs`` and ``/openapi.json`` are disabled in favour of
``/docs`` and ``/docs-json`` so the pair can sit behind HTTP Basic auth in the
environments listed under ``swagger.environments``.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import AppConfig
from .core.security import constant_time_compare

DOCS_URL = "/docs"
OPENAPI_URL = "/docs-json"

_basic = HTTPBasic(auto_error=False)


def docs_guard(config: AppConfig) -> Callable[..., Awaitable[None]]:
    if not config.swagger.protects(config.app.environment):

        async def _open() -> None:
            return None

        return _open

    expected_user = config.swagger.user or ""
    expected_password = config.swagger.password or ""

    async def _guard(credentials: HTTPBasicCredentials | None = Depends(_basic)) -> None:
        valid = (
            credentials is not None
            and constant_time_compare(credentials.username, expected_user)
            and constant_time_compare(credentials.password, expected_password)
        )
        if not valid:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid documentation credentials",
                headers={"WWW-Authenticate": "Basic"},
            )

    return _guard


def setup_swagger(app: FastAPI, config: AppConfig) -> None:
    guard = docs_guard(config)

    @app.get(OPENAPI_URL, include_in_schema=False, dependencies=[Depends(guard)])
    async def openapi_document() -> JSONResponse:
        return JSONResponse(app.openapi())

    @app.get(DOCS_URL, include_in_schema=False, dependencies=[Depends(guard)])
    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(
            openapi_url=OPENAPI_URL,
            title=f"{config.app.name} - Swagger UI",
            swagger_ui_parameters={"operationsSorter": "method"},
        )
