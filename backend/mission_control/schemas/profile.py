# backend/mission_control/schemas/profile.py
from typing import Optional
from pydantic import BaseModel


class ProfileUpdate(BaseModel):
    name: Optional[str] = None


class ProfileOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: str

    class Config:
        from_attributes = True
