"""
gladiator/review/services.py

Review Service Layer
- Clients submit one review per professional
- Authors edit or delete their own reviews
- Every write recomputes the professional's rating aggregate
"""

import logging
from typing import Any
from uuid import UUID

from gladiator.core.exceptions import (
    AlreadyReviewed,
    ConstraintViolation,
    InvalidRating,
    NotAClient,
    NotFoundError,
    NotReviewAuthor,
)
from gladiator.core.schemas import CurrentUser
from gladiator.core.validators import optional_text
from gladiator.database.enums import UserRole
from gladiator.database.models import PROFILES, REVIEWS
from gladiator.database.store import DataStore
from gladiator.rating.services import RatingService
from gladiator.review.schemas import ReviewClientInfo, ReviewRead

logger = logging.getLogger(__name__)


def validate_rating(rating: Any) -> int:
    """
    Raises:
        InvalidRating: Unless the rating is an integer from 1 to 5.
    """
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise InvalidRating()
    return rating


class ReviewService:
    """Review lifecycle with ownership checks and rating recomputation."""

    def __init__(self, store: DataStore) -> None:
        self.store = store
        self.ratings = RatingService(store)

    async def _get_review(self, review_id: UUID) -> dict[str, Any]:
        review = await self.store.fetch_one(REVIEWS, {"id": review_id})
        if not review:
            raise NotFoundError("Review not found")
        return review

    @staticmethod
    def _ensure_author(review: dict[str, Any], actor: CurrentUser) -> None:
        if review["client_id"] != actor.id:
            logger.warning(f"[REVIEW] {actor.id} is not the author of review {review['id']}")
            raise NotReviewAuthor()

    async def submit_review(
        self,
        professional_id: UUID,
        actor: CurrentUser,
        rating: int | None,
        comment: str | None = None,
    ) -> ReviewRead:
        """
        Submit a review for a professional.

        Raises:
            NotAClient: If the actor is not a client.
            InvalidRating: If the rating is not an integer from 1 to 5.
            NotFoundError: If the professional does not exist.
            AlreadyReviewed: If the actor already reviewed this professional.
        """
        if actor.role != UserRole.CLIENT:
            raise NotAClient("Only clients can submit reviews")
        rating = validate_rating(rating)

        professional = await self.store.fetch_one(PROFILES, {"id": professional_id})
        if not professional or professional["user_type"] != UserRole.PROFESSIONAL:
            raise NotFoundError("Professional not found")

        try:
            row = await self.store.insert(
                REVIEWS,
                {
                    "professional_id": professional_id,
                    "client_id": actor.id,
                    "rating": rating,
                    "comment": optional_text(comment),
                },
            )
        except ConstraintViolation as e:
            logger.info(f"[REVIEW] Duplicate review by {actor.id} for {professional_id}")
            raise AlreadyReviewed() from e

        logger.info(f"[REVIEW] {actor.id} reviewed {professional_id} with {rating} stars")
        await self.ratings.recompute(professional_id)
        return ReviewRead.model_validate(row)

    async def update_review(
        self,
        review_id: UUID,
        actor: CurrentUser,
        rating: int | None,
        comment: str | None = None,
    ) -> ReviewRead:
        """Edit the actor's own review; the rating is re-validated."""
        review = await self._get_review(review_id)
        self._ensure_author(review, actor)
        rating = validate_rating(rating)

        row = await self.store.update(
            REVIEWS, {"id": review_id}, {"rating": rating, "comment": optional_text(comment)}
        )
        if not row:
            raise NotFoundError("Review not found")

        logger.info(f"[REVIEW] Review {review_id} updated by {actor.id}")
        await self.ratings.recompute(review["professional_id"])
        return ReviewRead.model_validate(row)

    async def delete_review(self, review_id: UUID, actor: CurrentUser) -> None:
        review = await self._get_review(review_id)
        self._ensure_author(review, actor)

        await self.store.delete(REVIEWS, {"id": review_id})
        logger.info(f"[REVIEW] Review {review_id} deleted by {actor.id}")
        await self.ratings.recompute(review["professional_id"])

    async def list_reviews(self, professional_id: UUID) -> list[ReviewRead]:
        """Reviews for a professional, newest first, with author details."""
        rows = await self.store.fetch_all(
            REVIEWS, {"professional_id": professional_id}, order_by="-created_at"
        )
        client_ids = list({row["client_id"] for row in rows})
        clients = (
            {c["id"]: c for c in await self.store.fetch_all(PROFILES, {"id": client_ids})}
            if client_ids
            else {}
        )
        return [
            ReviewRead.model_validate(
                {
                    **row,
                    "client": (
                        ReviewClientInfo.model_validate(clients[row["client_id"]])
                        if row["client_id"] in clients
                        else None
                    ),
                }
            )
            for row in rows
        ]
