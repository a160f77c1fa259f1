"""
gladiator/rating/schemas.py

Rating Schemas
- RatingSummary: average rating and review count for a professional
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field


def format_rating(average_rating: Decimal | None, review_count: int) -> str | None:
    """
    Display text for a rating, e.g. "4.50 (2 reviews)".

    Returns None for the zero-review state so callers never render a null average.
    """
    if review_count <= 0 or average_rating is None:
        return None
    noun = "review" if review_count == 1 else "reviews"
    return f"{Decimal(average_rating):.2f} ({review_count} {noun})"


class RatingSummary(BaseModel):
    """Aggregated rating for a professional. (None, 0) is the zero-review state."""

    average_rating: Decimal | None = Field(
        default=None, description="Mean star rating, null when there are no reviews"
    )
    review_count: int = Field(default=0, ge=0, description="Number of reviews received")

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str | None:
        return format_rating(self.average_rating, self.review_count)
