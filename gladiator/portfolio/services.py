"""
gladiator/portfolio/services.py

Portfolio Service Layer
- Create portfolio items (with optional image upload)
- List a professional's items, newest first
- Owner-only deletion
- Batched item counts for the directory's has_portfolio filter
"""

import logging
from collections import Counter
from collections.abc import Iterable
from uuid import UUID

from gladiator.core.config import settings
from gladiator.core.exceptions import NotAProfessional, NotFoundError, NotOwner
from gladiator.core.schemas import CurrentUser
from gladiator.core.storage import BlobStorage, inspect_image
from gladiator.core.validators import optional_text, required_text
from gladiator.database.base import utcnow
from gladiator.database.enums import UserRole
from gladiator.database.models import PORTFOLIO_ITEMS
from gladiator.database.store import DataStore
from gladiator.portfolio.schemas import PortfolioItemRead, PortfolioItemWrite

logger = logging.getLogger(__name__)


class PortfolioService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def create_item(
        self,
        actor: CurrentUser,
        data: PortfolioItemWrite,
        image: bytes | None = None,
        storage: BlobStorage | None = None,
    ) -> PortfolioItemRead:
        """
        Add a portfolio item for the acting professional.

        Raises:
            NotAProfessional: If the actor is not a professional.
            EmptyField: If the title is blank.
            InvalidFile: If the image is empty, too large or not an image.
        """
        if actor.role != UserRole.PROFESSIONAL:
            raise NotAProfessional("Only professionals can add portfolio items")

        record = {
            "user_id": actor.id,
            "title": required_text(data.title, "title"),
            "description": optional_text(data.description),
            "project_url": optional_text(data.project_url),
            "tags": data.tags,
        }

        if image:
            if storage is None:
                raise ValueError("A blob storage is required to upload an image")
            info = inspect_image(image)
            path = f"{actor.id}/{int(utcnow().timestamp() * 1000)}.{info.extension}"
            record["image_url"] = await storage.upload(
                settings.PORTFOLIO_BUCKET, path, image, info.mime
            )

        row = await self.store.insert(PORTFOLIO_ITEMS, record)
        logger.info(f"[PORTFOLIO] Item {row['id']} created by {actor.id}")
        return PortfolioItemRead.model_validate(row)

    async def list_items(self, professional_id: UUID) -> list[PortfolioItemRead]:
        rows = await self.store.fetch_all(
            PORTFOLIO_ITEMS, {"user_id": professional_id}, order_by="-created_at"
        )
        return [PortfolioItemRead.model_validate(row) for row in rows]

    async def delete_item(self, item_id: UUID, actor: CurrentUser) -> None:
        item = await self.store.fetch_one(PORTFOLIO_ITEMS, {"id": item_id})
        if not item:
            raise NotFoundError("Portfolio item not found")
        if item["user_id"] != actor.id:
            logger.warning(f"[PORTFOLIO] {actor.id} tried to delete item {item_id} they do not own")
            raise NotOwner("You can only delete your own portfolio items")

        await self.store.delete(PORTFOLIO_ITEMS, {"id": item_id})
        logger.info(f"[PORTFOLIO] Item {item_id} deleted by {actor.id}")

    async def count_for(self, professional_ids: Iterable[UUID]) -> dict[UUID, int]:
        """Portfolio item count per professional, from a single query."""
        ids = list(professional_ids)
        if not ids:
            return {}
        rows = await self.store.fetch_all(PORTFOLIO_ITEMS, {"user_id": ids})
        counts = Counter(row["user_id"] for row in rows)
        return {pid: counts.get(pid, 0) for pid in ids}
