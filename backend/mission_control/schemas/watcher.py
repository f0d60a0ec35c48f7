# backend/mission_control/schemas/watcher.py
from datetime import datetime
from pydantic import BaseModel


class WatcherCreate(BaseModel):
    watcher_id: str


class WatcherOut(BaseModel):
    mission_id: str
    watcher_id: str
    created_at: datetime

    class Config:
        from_attributes = True
