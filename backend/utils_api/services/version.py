from __future__ import annotations

from ..config import AppConfig


class VersionService:
    def __init__(self, config: AppConfig) -> None:
        self._config = config

    def get_version(self) -> str:
        return self._config.app.version
