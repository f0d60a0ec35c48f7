# backend/mission_control/schemas/auth.py
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=128)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: str
    email: str

    class Config:
        from_attributes = True


class SessionOut(BaseModel):
    access_token: str
    expires_at: datetime
    user: UserOut
