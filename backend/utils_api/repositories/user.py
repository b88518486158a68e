from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)
