from __future__ import annotations


class EntityNotFound(Exception):
    """Raised by the ``*_or_fail`` CRUD operations when nothing matched."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"{entity_name} not found")


class ConfigError(RuntimeError):
    pass


__all__ = ["ConfigError", "EntityNotFound"]
