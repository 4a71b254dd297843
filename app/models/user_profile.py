"""
People Profile — UserProfile model (basic employee record).
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        String(320), unique=True, index=True, nullable=False,
        comment="Lower-cased, trimmed",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    team: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    # ── Relationships ──────────────────────────────────────────────
    core_values: Mapped["CoreValues"] = relationship(
        "CoreValues", back_populates="profile", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    character_strengths: Mapped["CharacterStrengths"] = relationship(
        "CharacterStrengths", back_populates="profile", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    chronotype: Mapped["Chronotype"] = relationship(
        "Chronotype", back_populates="profile", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    big_five_profile: Mapped["BigFiveProfile"] = relationship(
        "BigFiveProfile", back_populates="profile", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    goals: Mapped["Goals"] = relationship(
        "Goals", back_populates="profile", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserProfile {self.email!r} id={self.id}>"
