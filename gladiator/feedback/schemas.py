"""
gladiator/feedback/schemas.py

Feedback Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gladiator.database.enums import FeedbackType


class FeedbackWrite(BaseModel):
    type: FeedbackType = Field(..., description="feature, improvement, bug or other")
    title: str = Field(..., max_length=200)
    description: str
    email: str | None = Field(default=None, max_length=255, description="Optional reply address")


class FeedbackRead(BaseModel):
    id: UUID
    user_id: UUID | None = None
    type: FeedbackType
    title: str
    description: str
    email: str | None = None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
