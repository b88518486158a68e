from .base import BaseRepository, FindOptions, UpdateResult
from .user import UserRepository

__all__ = ["BaseRepository", "FindOptions", "UpdateResult", "UserRepository"]
