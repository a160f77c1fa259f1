"""
gladiator/review/routes.py

Review Routes
- Clients submit, edit and delete reviews
- Public listing of a professional's reviews and rating summary
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Request, status

from gladiator.core.dependencies import CurrentUserDep, StoreDep
from gladiator.core.limiter import limiter
from gladiator.core.schemas import MessageResponse
from gladiator.rating.schemas import RatingSummary
from gladiator.rating.services import RatingService
from gladiator.review.schemas import ReviewRead, ReviewWrite
from gladiator.review.services import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------
# Submit / Edit / Delete
# ---------------------------------------------------
@router.post(
    "/{professional_id}",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Review",
    description="Clients can review a professional once.",
)
@limiter.limit("5/minute")
async def submit_review(
    request: Request,
    professional_id: UUID,
    data: ReviewWrite,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> ReviewRead:
    return await ReviewService(store).submit_review(
        professional_id, current_user, data.rating, data.comment
    )


@router.patch(
    "/{review_id}",
    response_model=ReviewRead,
    status_code=status.HTTP_200_OK,
    summary="Edit Review",
)
@limiter.limit("10/minute")
async def update_review(
    request: Request,
    review_id: UUID,
    data: ReviewWrite,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> ReviewRead:
    return await ReviewService(store).update_review(
        review_id, current_user, data.rating, data.comment
    )


@router.delete(
    "/{review_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Review",
)
@limiter.limit("10/minute")
async def delete_review(
    request: Request,
    review_id: UUID,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    await ReviewService(store).delete_review(review_id, current_user)
    return MessageResponse(detail="Review deleted")


# ---------------------------------------------------
# Public Reads
# ---------------------------------------------------
@router.get(
    "/professional/{professional_id}",
    response_model=list[ReviewRead],
    status_code=status.HTTP_200_OK,
    summary="List Reviews for Professional",
)
@limiter.limit("60/minute")
async def list_reviews(
    request: Request,
    professional_id: UUID,
    store: StoreDep,
) -> list[ReviewRead]:
    return await ReviewService(store).list_reviews(professional_id)


@router.get(
    "/summary/{professional_id}",
    response_model=RatingSummary,
    status_code=status.HTTP_200_OK,
    summary="Get Rating Summary",
    description="Average rating and review count. Zero reviews yields a null average.",
)
@limiter.limit("60/minute")
async def get_rating_summary(
    request: Request,
    professional_id: UUID,
    store: StoreDep,
) -> RatingSummary:
    return await RatingService(store).get_rating(professional_id)
