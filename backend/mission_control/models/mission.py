# backend/mission_control/models/mission.py
from datetime import date, datetime, timezone
from sqlalchemy import String, Text, Date, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from mission_control.db import Base
from mission_control.models._ids import new_id

MISSION_STATUSES = ("active", "completed", "expired")


def _now():
    return datetime.now(timezone.utc)


class Mission(Base):
    __tablename__ = "missions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now, nullable=False
    )

    milestones = relationship(
        "Milestone",
        back_populates="mission",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    watchers = relationship(
        "Watcher",
        back_populates="mission",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("status IN ('active', 'completed', 'expired')", name="chk_mission_status"),
        CheckConstraint("end_date >= start_date", name="chk_mission_dates"),
    )


# expiry pass filters on these three
Index("ix_missions_owner_status_end", Mission.owner_id, Mission.status, Mission.end_date)
