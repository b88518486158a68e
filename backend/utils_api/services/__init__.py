from .base import BaseService
from .user import UserService
from .version import VersionService

__all__ = [
    "BaseService",
    "UserService",
    "VersionService",
]
