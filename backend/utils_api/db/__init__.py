from .base import Base, BaseEntity
from .models import User
from .naming import snake_case
from .session import Database

__all__ = ["Base", "BaseEntity", "Database", "User", "snake_case"]
