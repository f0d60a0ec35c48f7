# backend/mission_control/config.py
from __future__ import annotations

import os
from dataclasses import dataclass


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    database_url: str = "sqlite:///./mission_control.db"
    frontend_origin: str = "http://localhost:3000"
    session_ttl_days: int = 7
    log_level: str = "INFO"
    create_tables: bool = True
    api_url: str = "http://127.0.0.1:8000"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            frontend_origin=os.getenv("FRONTEND_ORIGIN", cls.frontend_origin),
            session_ttl_days=int(os.getenv("SESSION_TTL_DAYS", str(cls.session_ttl_days))),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            create_tables=_flag("CREATE_TABLES", cls.create_tables),
            api_url=os.getenv("MISSION_CONTROL_API_URL", cls.api_url),
        )
