# backend/mission_control/schemas/log.py
from datetime import datetime
from pydantic import BaseModel, field_validator


class LogCreate(BaseModel):
    milestone_id: str
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content is required")
        return v


class LogOut(BaseModel):
    id: str
    milestone_id: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
