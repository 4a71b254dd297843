"""
People Profile — Core values and character strengths (up to five each).
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user_profile import utcnow

JSONType = JSON().with_variant(JSONB(), "postgresql")


class CoreValues(Base):
    __tablename__ = "core_values"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    values: Mapped[list] = mapped_column(
        JSONType, nullable=False, default=list, comment="Array of up to 5 values"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow,
        server_default=func.now(), nullable=False,
    )

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="core_values")

    def __repr__(self) -> str:
        return f"<CoreValues profile={self.profile_id} n={len(self.values or [])}>"


class CharacterStrengths(Base):
    __tablename__ = "character_strengths"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    strengths: Mapped[list] = mapped_column(
        JSONType, nullable=False, default=list, comment="Array of up to 5 strengths"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow,
        server_default=func.now(), nullable=False,
    )

    profile: Mapped["UserProfile"] = relationship(
        "UserProfile", back_populates="character_strengths"
    )

    def __repr__(self) -> str:
        return f"<CharacterStrengths profile={self.profile_id} n={len(self.strengths or [])}>"
