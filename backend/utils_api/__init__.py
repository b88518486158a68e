"""
Backend scaffold: a FastAPI application over async SQLAlchemy.

Modules are organised into config, database, repositories, services, routers
and middleware.  ``repositories.base`` and ``services.base`` hold the generic
soft-delete CRUD layer that concrete entities build on.
"""

from .config import AppConfig, load_config

__all__ = ["AppConfig", "load_config"]
