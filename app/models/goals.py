"""
People Profile — Goals model (professional and personal goals for a period).
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user_profile import utcnow


class Goals(Base):
    __tablename__ = "goals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    period: Mapped[str] = mapped_column(
        String(100), nullable=False, comment='e.g. "Q1 2025"'
    )
    professional_goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    personal_goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow,
        server_default=func.now(), nullable=False,
    )

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="goals")

    def __repr__(self) -> str:
        return f"<Goals profile={self.profile_id} period={self.period!r}>"
