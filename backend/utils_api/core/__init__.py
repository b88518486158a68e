from .exceptions import ConfigError, EntityNotFound
from .security import constant_time_compare, now_utc

__all__ = [
    "ConfigError",
    "EntityNotFound",
    "constant_time_compare",
    "now_utc",
]
