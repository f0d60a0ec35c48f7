# backend/mission_control/schemas/milestone.py
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

MilestoneStatus = Literal["active", "completed"]
Priority = Literal["low", "medium", "high"]


class MilestoneCreate(BaseModel):
    name: str = Field(..., max_length=200)
    notes: Optional[str] = None
    deadline: date
    priority: Priority = "medium"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes_is_none(cls, v):
        if v is None:
            return None
        return v.strip() or None


class MilestoneUpdate(BaseModel):
    status: MilestoneStatus


class MilestoneOut(BaseModel):
    id: str
    mission_id: str
    name: str
    notes: Optional[str] = None
    deadline: date
    priority: Priority
    status: MilestoneStatus
    created_at: datetime

    class Config:
        from_attributes = True
