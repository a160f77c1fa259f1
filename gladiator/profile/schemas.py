"""
gladiator/profile/schemas.py

Profile Schemas
Defines Pydantic models for profile registration, updates and reads, plus the
ProfessionalRead snapshot the directory engine filters and sorts.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from gladiator.core.validators import parse_tags
from gladiator.database.enums import Category, UserRole
from gladiator.rating.schemas import format_rating

# Fields only meaningful for one role; the other role may not set them.
PROFESSIONAL_FIELDS: frozenset[str] = frozenset(
    {
        "age",
        "category",
        "skills",
        "bio",
        "experience_years",
        "hourly_rate",
        "location",
        "crypto_wallet_trc20",
        "accepts_crypto",
    }
)
CLIENT_FIELDS: frozenset[str] = frozenset(
    {"company_name", "company_description", "website", "phone"}
)


# ---------------------------------------------------
# Write Schemas
# ---------------------------------------------------
class ProfileUpdate(BaseModel):
    """Partial profile update. Only fields explicitly sent are applied."""

    full_name: str | None = Field(default=None, max_length=200, description="Display name")
    email: str | None = Field(default=None, max_length=255, description="Contact email")

    # --- Professional fields ---
    age: int | None = Field(default=None, ge=0, le=150)
    category: Category | None = Field(default=None, description="Professional category")
    skills: list[str] | None = Field(
        default=None, description="Skills as a list or a comma-separated string"
    )
    bio: str | None = None
    experience_years: int | None = Field(default=None, ge=0)
    hourly_rate: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    location: str | None = Field(default=None, max_length=200)
    crypto_wallet_trc20: str | None = Field(
        default=None, max_length=100, description="USDT TRC20 wallet address"
    )
    accepts_crypto: bool | None = None

    # --- Client fields ---
    company_name: str | None = Field(default=None, max_length=200)
    company_description: str | None = None
    website: str | None = None
    phone: str | None = Field(default=None, max_length=30)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, value: object) -> object:
        if isinstance(value, (str, list, tuple)):
            return parse_tags(value)
        return value


class ProfileRegister(ProfileUpdate):
    """Schema used when an authenticated identity creates its profile."""

    user_type: UserRole = Field(..., description="Marketplace role")


# ---------------------------------------------------
# Read Schemas
# ---------------------------------------------------
class ProfileRead(BaseModel):
    """Full profile as stored."""

    id: UUID
    email: str | None = None
    user_type: UserRole
    full_name: str | None = None
    avatar_url: str | None = None

    age: int | None = None
    category: Category | None = None
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None
    experience_years: int | None = None
    hourly_rate: Decimal | None = None
    location: str | None = None
    crypto_wallet_trc20: str | None = None
    accepts_crypto: bool = False

    company_name: str | None = None
    company_description: str | None = None
    website: str | None = None
    phone: str | None = None

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfessionalRead(BaseModel):
    """Public directory card for a professional, enriched with its rating."""

    id: UUID
    full_name: str | None = None
    avatar_url: str | None = None
    category: Category | None = None
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None
    experience_years: int | None = None
    hourly_rate: Decimal | None = None
    location: str | None = None
    accepts_crypto: bool = False
    created_at: datetime | None = None
    average_rating: Decimal | None = None
    review_count: int = 0

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rating_label(self) -> str | None:
        return format_rating(self.average_rating, self.review_count)
