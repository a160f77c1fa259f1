"""
gladiator/directory/schemas.py

Directory Schemas
- DirectoryCriteria: the filter/sort state of one directory query
- DirectoryResult: filtered, ordered professionals plus counters
- CategoryRead: one entry of the fixed category list
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from gladiator.database.enums import Category, SortOrder
from gladiator.profile.schemas import ProfessionalRead


class DirectoryCriteria(BaseModel):
    """Filter and sort criteria. Defaults select every professional, newest first."""

    category: Category | Literal["all"] = Field(default="all", description="Category or 'all'")
    search: str = Field(default="", description="Free-text query over name, bio and skills")
    min_price: Decimal | None = Field(default=None, ge=0, description="Minimum hourly rate")
    max_price: Decimal | None = Field(default=None, ge=0, description="Maximum hourly rate")
    min_experience: int | None = Field(default=None, ge=0, description="Minimum years of experience")
    has_portfolio: bool = Field(default=False, description="Only professionals with portfolio items")
    sort_by: SortOrder = Field(default=SortOrder.NEWEST)


class DirectoryResult(BaseModel):
    total_count: int = Field(..., description="Number of professionals after filtering")
    active_filter_count: int = Field(..., description="Number of non-default criteria")
    seq: int | None = Field(default=None, description="Echo of the client's request sequence")
    items: list[ProfessionalRead]


class CategoryRead(BaseModel):
    value: Category
    label: str
