from . import user, version

__all__ = ["user", "version"]
