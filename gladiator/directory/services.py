"""
gladiator/directory/services.py

Directory Service Layer
Loads professional profiles, enriches them with rating aggregates and runs
the filter/sort engine. Portfolio counts are fetched in one batch, only for
the professionals left after the cheaper filters and only when requested.
"""

import logging

from gladiator.database.enums import UserRole
from gladiator.database.models import PROFILES
from gladiator.database.store import DataStore
from gladiator.directory import engine
from gladiator.directory.schemas import DirectoryCriteria, DirectoryResult
from gladiator.portfolio.services import PortfolioService
from gladiator.profile.schemas import ProfessionalRead
from gladiator.rating.services import RatingService

logger = logging.getLogger(__name__)


class DirectoryService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def load_professionals(self) -> list[ProfessionalRead]:
        """All professional profiles, newest first, with their rating aggregates."""
        rows = await self.store.fetch_all(
            PROFILES, {"user_type": UserRole.PROFESSIONAL}, order_by="-created_at"
        )
        ratings = await RatingService(self.store).ratings_for(row["id"] for row in rows)
        return [
            ProfessionalRead.model_validate(
                {
                    **row,
                    "average_rating": ratings[row["id"]].average_rating,
                    "review_count": ratings[row["id"]].review_count,
                }
            )
            for row in rows
        ]

    async def search(self, criteria: DirectoryCriteria, seq: int | None = None) -> DirectoryResult:
        professionals = await self.load_professionals()
        result = engine.narrow(professionals, criteria)

        if criteria.has_portfolio:
            counts = await PortfolioService(self.store).count_for(p.id for p in result)
            result = engine.filter_has_portfolio(result, counts)

        result = engine.order(result, criteria.sort_by)
        logger.debug(
            f"[DIRECTORY] seq={seq} {len(result)}/{len(professionals)} professionals match "
            f"{criteria.model_dump(exclude_defaults=True)}"
        )
        return DirectoryResult(
            total_count=len(result),
            active_filter_count=engine.active_filter_count(criteria),
            seq=seq,
            items=result,
        )
