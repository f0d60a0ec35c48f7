# backend/mission_control/models/milestone.py
from datetime import date, datetime, timezone
from sqlalchemy import String, Text, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from mission_control.db import Base
from mission_control.models._ids import new_id

MILESTONE_STATUSES = ("active", "completed")
PRIORITIES = ("low", "medium", "high")


class Milestone(Base):
    __tablename__ = "milestones"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    mission_id: Mapped[str] = mapped_column(
        ForeignKey("missions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    deadline: Mapped[date] = mapped_column(Date, nullable=False)
    priority: Mapped[str] = mapped_column(String(8), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    mission = relationship("Mission", back_populates="milestones")
    logs = relationship(
        "Log",
        back_populates="milestone",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("status IN ('active', 'completed')", name="chk_milestone_status"),
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="chk_milestone_priority"),
    )
