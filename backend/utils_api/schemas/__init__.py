from .user import DeleteResponse, RestoreResponse, UserCreate, UserResponse, UserUpdate

__all__ = [
    "DeleteResponse",
    "RestoreResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
