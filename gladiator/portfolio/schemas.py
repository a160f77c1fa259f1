"""
gladiator/portfolio/schemas.py

Portfolio Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gladiator.core.validators import parse_tags


class PortfolioItemWrite(BaseModel):
    """Schema used when a professional adds a portfolio item."""

    title: str = Field(..., max_length=200, description="Project title")
    description: str | None = Field(default=None, description="Project description")
    project_url: str | None = Field(default=None, description="Link to the live project")
    tags: list[str] = Field(
        default_factory=list, description="Tags as a list or a comma-separated string"
    )

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: object) -> object:
        if value is None or isinstance(value, (str, list, tuple)):
            return parse_tags(value)
        return value


class PortfolioItemRead(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    image_url: str | None = None
    project_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
