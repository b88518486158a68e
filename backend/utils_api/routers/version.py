from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from .. import dependencies
from ..services.version import VersionService

router = APIRouter(prefix="/version", tags=["Version"])


@router.get("", response_class=PlainTextResponse)
async def get_version(
    service: VersionService = Depends(dependencies.get_version_service),
) -> str:
    return service.get_version()
