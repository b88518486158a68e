from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .container import AppContainer
from .repositories.user import UserRepository
from .services.user import UserService
from .services.version import VersionService


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def get_db_session(
    container: AppContainer = Depends(get_container),
) -> AsyncIterator[AsyncSession]:
    async with container.database.session() as session:
        yield session


def get_user_repository(db: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repository)


def get_version_service(
    container: AppContainer = Depends(get_container),
) -> VersionService:
    return container.version_service
