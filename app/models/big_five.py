"""
People Profile — BigFiveProfile model (one JSON document per trait).
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user_profile import utcnow
from app.models.values import JSONType


class BigFiveProfile(Base):
    __tablename__ = "big_five_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    neuroticism_data: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    extraversion_data: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    openness_data: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    agreeableness_data: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    conscientiousness_data: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow,
        server_default=func.now(), nullable=False,
    )

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="big_five_profile")

    def __repr__(self) -> str:
        return f"<BigFiveProfile profile={self.profile_id}>"
