from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import FastAPI

from .config import AppConfig
from .db.session import Database
from .services.version import VersionService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    config: AppConfig
    database: Database
    version_service: VersionService

    @classmethod
    def build(cls, config: AppConfig) -> "AppContainer":
        return cls(
            config=config,
            database=Database(config),
            version_service=VersionService(config),
        )

    async def startup(self, app: FastAPI) -> None:
        if self.config.database.synchronize:
            await self.database.create_all()
        app.state.container = self
        logger.info(
            "%s %s started (environment=%s)",
            self.config.app.name,
            self.config.app.version,
            self.config.app.environment,
        )

    async def shutdown(self, app: FastAPI) -> None:
        await self.database.dispose()
        logger.info("%s stopped", self.config.app.name)
