"""
profile/models.py

Defines the Profile model shared by professionals and clients.
- `user_type` decides which group of optional fields is meaningful.
- The profile id is the hosted auth provider's user id.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import CheckConstraint

from gladiator.database.base import Base, enum_values, utcnow
from gladiator.database.enums import Category, UserRole


class Profile(Base):
    """
    Marketplace participant. Professionals carry category, skills, rate and
    wallet fields; clients carry company fields.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("hourly_rate IS NULL OR hourly_rate >= 0", name="hourly_rate_non_negative"),
        CheckConstraint(
            "experience_years IS NULL OR experience_years >= 0", name="experience_non_negative"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4, comment="Auth provider user id"
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, comment="Contact email")
    user_type: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_type", values_callable=enum_values),
        nullable=False,
        comment="Marketplace role (professional, client)",
    )
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String, nullable=True)

    # --- Professional fields ---
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    category: Mapped[Category | None] = mapped_column(
        Enum(Category, name="category", values_callable=enum_values), nullable=True
    )
    skills: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list, comment="Ordered list of free-text skill tags"
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    experience_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    crypto_wallet_trc20: Mapped[str | None] = mapped_column(
        String(100), nullable=True, comment="Published USDT TRC20 wallet address"
    )
    accepts_crypto: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # --- Client fields ---
    company_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    company_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
