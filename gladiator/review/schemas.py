"""
gladiator/review/schemas.py

Review Schemas
Defines Pydantic models used for:
- Submitting and editing reviews (client -> professional)
- Reading reviews with embedded client information
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------
# Partial Schemas for Embedding
# ---------------------------------------------------
class ReviewClientInfo(BaseModel):
    """Partial client information shown next to a review."""

    id: UUID
    full_name: str | None = None
    avatar_url: str | None = None
    company_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Write Schema
# ---------------------------------------------------
class ReviewWrite(BaseModel):
    """Schema for submitting or editing a review."""

    rating: int | None = Field(default=None, description="Star rating from 1 to 5")
    comment: str | None = Field(default=None, description="Optional review text")


# ---------------------------------------------------
# Read Schema
# ---------------------------------------------------
class ReviewRead(BaseModel):
    id: UUID
    professional_id: UUID
    client_id: UUID
    rating: int
    comment: str | None = None
    created_at: datetime
    updated_at: datetime
    client: ReviewClientInfo | None = Field(default=None, description="Author details")

    model_config = ConfigDict(from_attributes=True)
