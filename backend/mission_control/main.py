# backend/mission_control/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mission_control.config import Settings
from mission_control.db import Database
from mission_control.routers.auth import router as auth_router
from mission_control.routers.missions import router as missions_router
from mission_control.routers.watchers import router as watchers_router
from mission_control.routers.milestones import router as milestones_router
from mission_control.routers.logs import router as logs_router
from mission_control.routers.profiles import router as profiles_router

log = logging.getLogger(__name__)


def build_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    database = database or Database(settings.database_url)
    if settings.create_tables:
        database.create_all()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        log.info("mission control up (db=%s)", database.engine.url.render_as_string(hide_password=True))
        yield
        database.dispose()
        log.info("database disposed")

    app = FastAPI(title="Mission Control API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    # Health
    @app.get("/health")
    def health():
        return {"ok": True, "database": database.healthcheck()}

    app.include_router(auth_router)
    app.include_router(profiles_router)
    app.include_router(missions_router)
    app.include_router(watchers_router)
    app.include_router(milestones_router)
    app.include_router(logs_router)

    return app
