"""
People Profile — Chronotype model (one or more sleep/energy archetypes).
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user_profile import utcnow
from app.models.values import JSONType


class Chronotype(Base):
    __tablename__ = "chronotypes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    types: Mapped[list] = mapped_column(
        JSONType, nullable=False, default=list, comment="Lion / Bear / Wolf / Dolphin"
    )
    primary_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow,
        server_default=func.now(), nullable=False,
    )

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="chronotype")

    def __repr__(self) -> str:
        return f"<Chronotype profile={self.profile_id} primary={self.primary_type!r}>"
