"""
rating/models.py

Derived per-professional rating aggregate, rewritten by RatingService.recompute
after every review write.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gladiator.database.base import Base, utcnow


class ProfessionalRating(Base):
    __tablename__ = "professional_ratings"

    professional_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE", name="fk_professional_ratings_professional_id"),
        primary_key=True,
    )
    average_rating: Mapped[Decimal | None] = mapped_column(
        Numeric(3, 2), nullable=True, comment="Null when there are no reviews"
    )
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
