# backend/mission_control/models/profile.py
from sqlalchemy import Column, String
from mission_control.db import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)  # same as users.id
    name = Column(String(128), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
