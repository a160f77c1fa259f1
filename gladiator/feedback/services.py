"""
gladiator/feedback/services.py

Feedback Service Layer
Stores product feedback from signed-in users or anonymous visitors.
"""

import logging

from gladiator.core.schemas import Identity
from gladiator.core.validators import optional_text, required_text
from gladiator.database.enums import FeedbackType
from gladiator.database.models import FEEDBACK, PROFILES
from gladiator.database.store import DataStore
from gladiator.feedback.schemas import FeedbackRead

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def submit_feedback(
        self,
        identity: Identity | None,
        type: FeedbackType,
        title: str | None,
        description: str | None,
        email: str | None = None,
    ) -> FeedbackRead:
        """
        Record feedback. The reply email falls back to the caller's identity email.
        Feedback is linked to the caller only once they have a profile.

        Raises:
            EmptyField: If the title or description is blank.
        """
        user_id = None
        if identity and await self.store.fetch_one(PROFILES, {"id": identity.id}):
            user_id = identity.id

        record = {
            "user_id": user_id,
            "type": FeedbackType(type),
            "title": required_text(title, "title"),
            "description": required_text(description, "description"),
            "email": optional_text(email) or (identity.email if identity else None),
            "status": "pending",
        }
        row = await self.store.insert(FEEDBACK, record)
        logger.info(
            f"[FEEDBACK] {record['type'].value} feedback {row['id']} from "
            f"{identity.id if identity else 'anonymous'}"
        )
        return FeedbackRead.model_validate(row)
