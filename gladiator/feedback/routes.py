"""
gladiator/feedback/routes.py

Feedback Routes
- Submit product feedback, signed in or anonymously
"""

from fastapi import APIRouter, Request, status

from gladiator.core.dependencies import OptionalIdentityDep, StoreDep
from gladiator.core.limiter import limiter
from gladiator.feedback.schemas import FeedbackRead, FeedbackWrite
from gladiator.feedback.services import FeedbackService

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post(
    "",
    response_model=FeedbackRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Feedback",
    description="Send a feature request, improvement idea, bug report or other feedback.",
)
@limiter.limit("5/minute")
async def submit_feedback(
    request: Request,
    data: FeedbackWrite,
    store: StoreDep,
    identity: OptionalIdentityDep,
) -> FeedbackRead:
    return await FeedbackService(store).submit_feedback(
        identity, data.type, data.title, data.description, data.email
    )
