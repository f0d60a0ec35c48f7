# backend/mission_control/models/watcher.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from mission_control.db import Base


class Watcher(Base):
    __tablename__ = "watchers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mission_id = Column(String(36), ForeignKey("missions.id", ondelete="CASCADE"), nullable=False, index=True)
    watcher_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    mission = relationship("Mission", back_populates="watchers")

    __table_args__ = (
        UniqueConstraint("mission_id", "watcher_id", name="uq_watcher_mission"),
    )
