# backend/mission_control/schemas/mission.py
from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

MissionStatus = Literal["active", "completed", "expired"]


class MissionCreate(BaseModel):
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    start_date: date
    end_date: date

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v):
        if v is None:
            return None
        return v.strip() or None


class MissionUpdate(BaseModel):
    # owners can only mark a mission satisfied; expiry is the server's job
    status: Literal["completed"]


class MissionOut(BaseModel):
    id: str
    owner_id: str
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    status: MissionStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExpireResult(BaseModel):
    expired: int
