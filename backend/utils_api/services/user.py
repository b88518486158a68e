from __future__ import annotations

from ..db.models import User
from ..repositories.user import UserRepository
from .base import BaseService


class UserService(BaseService[User, UserRepository]):
    def get_user(self) -> str:
        return "user"
