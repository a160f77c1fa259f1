"""
gladiator/rating/services.py

Rating Aggregation
- Read a professional's rating aggregate (zero-review state when absent)
- Batch-read aggregates to enrich directory listings
- Recompute the aggregate from the reviews table after every review write
"""

import logging
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from uuid import UUID

from gladiator.core.cache import DEFAULT_CACHE_TTL, cache_key, redis_client
from gladiator.core.exceptions import ConstraintViolation
from gladiator.database.models import PROFESSIONAL_RATINGS, REVIEWS
from gladiator.database.store import DataStore
from gladiator.rating.schemas import RatingSummary

logger = logging.getLogger(__name__)

RATING_SUMMARY_NS = "rating:summary"
TWO_PLACES = Decimal("0.01")


def average(ratings: list[int]) -> Decimal | None:
    """Mean of the ratings rounded to two places, None for no ratings."""
    if not ratings:
        return None
    return (Decimal(sum(ratings)) / Decimal(len(ratings))).quantize(TWO_PLACES, ROUND_HALF_UP)


class RatingService:
    """Reads and maintains the professional_ratings aggregate."""

    def __init__(self, store: DataStore, cache: Any = redis_client) -> None:
        self.store = store
        self.cache = cache

    async def _invalidate(self, professional_id: UUID) -> None:
        if not self.cache:
            return
        try:
            await self.cache.delete(cache_key(RATING_SUMMARY_NS, professional_id))
        except Exception as e:
            logger.error(f"[CACHE ASYNC RATING ERROR] Invalidation failed for {professional_id}: {e}")

    async def get_rating(self, professional_id: UUID) -> RatingSummary:
        """
        Return the professional's rating aggregate.

        A missing aggregate row is the zero-review state (None, 0), not an error.
        Store failures propagate as TransportError.
        """
        key = cache_key(RATING_SUMMARY_NS, professional_id)
        if self.cache:
            try:
                cached = await self.cache.get(key)
                if cached:
                    logger.debug(f"[CACHE ASYNC HIT] Rating summary {professional_id}")
                    return RatingSummary.model_validate_json(cached)
            except Exception as e:
                logger.error(f"[CACHE ASYNC READ ERROR] Rating summary {professional_id}: {e}")

        row = await self.store.fetch_one(PROFESSIONAL_RATINGS, {"professional_id": professional_id})
        summary = RatingSummary.model_validate(row) if row else RatingSummary()

        if self.cache:
            try:
                await self.cache.set(key, summary.model_dump_json(), ex=DEFAULT_CACHE_TTL)
            except Exception as e:
                logger.error(f"[CACHE ASYNC WRITE ERROR] Rating summary {professional_id}: {e}")
        return summary

    async def ratings_for(self, professional_ids: Iterable[UUID]) -> dict[UUID, RatingSummary]:
        """Batch lookup; ids without an aggregate row get the zero-review state."""
        ids = list(professional_ids)
        if not ids:
            return {}
        rows = await self.store.fetch_all(PROFESSIONAL_RATINGS, {"professional_id": ids})
        found = {row["professional_id"]: RatingSummary.model_validate(row) for row in rows}
        return {pid: found.get(pid, RatingSummary()) for pid in ids}

    async def recompute(self, professional_id: UUID) -> RatingSummary:
        """Rebuild the aggregate row for one professional from its reviews."""
        reviews = await self.store.fetch_all(REVIEWS, {"professional_id": professional_id})
        ratings = [review["rating"] for review in reviews]
        values = {"average_rating": average(ratings), "review_count": len(ratings)}

        row = await self.store.update(
            PROFESSIONAL_RATINGS, {"professional_id": professional_id}, values
        )
        if row is None:
            try:
                row = await self.store.insert(
                    PROFESSIONAL_RATINGS, {"professional_id": professional_id, **values}
                )
            except ConstraintViolation:
                # A concurrent recompute created the row first.
                row = await self.store.update(
                    PROFESSIONAL_RATINGS, {"professional_id": professional_id}, values
                )

        await self._invalidate(professional_id)
        summary = RatingSummary.model_validate(row)
        logger.info(
            f"[RATING] Recomputed professional={professional_id}: "
            f"avg={summary.average_rating} count={summary.review_count}"
        )
        return summary
