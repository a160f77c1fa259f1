"""
gladiator/directory/engine.py

Directory filter/sort engine.

Pure functions over ProfessionalRead snapshots. Steps run in a fixed order and
each can be skipped:
  1. category (exact, "all" bypasses)
  2. free text over full_name, bio and skills
  3. price range on hourly_rate
  4. minimum experience
  5. has_portfolio (needs portfolio counts)
  6. sort (stable)
"""

from collections.abc import Iterable, Mapping
from uuid import UUID

from gladiator.database.enums import ALL_CATEGORIES, SortOrder
from gladiator.directory.schemas import DirectoryCriteria
from gladiator.profile.schemas import ProfessionalRead


def _matches_text(professional: ProfessionalRead, query: str) -> bool:
    if query in (professional.full_name or "").casefold():
        return True
    if query in (professional.bio or "").casefold():
        return True
    return any(query in skill.casefold() for skill in professional.skills)


def _in_price_range(professional: ProfessionalRead, criteria: DirectoryCriteria) -> bool:
    if criteria.min_price is None and criteria.max_price is None:
        return True
    rate = professional.hourly_rate
    if rate is None:
        return False
    if criteria.min_price is not None and rate < criteria.min_price:
        return False
    if criteria.max_price is not None and rate > criteria.max_price:
        return False
    return True


def narrow(
    professionals: Iterable[ProfessionalRead], criteria: DirectoryCriteria
) -> list[ProfessionalRead]:
    """Apply the category, text, price and experience filters, keeping input order."""
    result = list(professionals)

    if criteria.category != ALL_CATEGORIES:
        result = [p for p in result if p.category == criteria.category]

    query = criteria.search.strip().casefold()
    if query:
        result = [p for p in result if _matches_text(p, query)]

    result = [p for p in result if _in_price_range(p, criteria)]

    if criteria.min_experience is not None:
        result = [
            p
            for p in result
            if p.experience_years is not None and p.experience_years >= criteria.min_experience
        ]
    return result


def filter_has_portfolio(
    professionals: Iterable[ProfessionalRead], portfolio_counts: Mapping[UUID, int]
) -> list[ProfessionalRead]:
    """Drop professionals whose portfolio count is zero or unknown."""
    return [p for p in professionals if portfolio_counts.get(p.id, 0) > 0]


def order(professionals: Iterable[ProfessionalRead], sort_by: SortOrder) -> list[ProfessionalRead]:
    """Stable sort. NEWEST keeps the input order."""
    result = list(professionals)
    if sort_by == SortOrder.PRICE_LOW:
        result.sort(key=lambda p: (p.hourly_rate is None, p.hourly_rate or 0))
    elif sort_by == SortOrder.PRICE_HIGH:
        result.sort(key=lambda p: (p.hourly_rate is None, -(p.hourly_rate or 0)))
    elif sort_by == SortOrder.EXPERIENCE:
        result.sort(key=lambda p: -(p.experience_years or 0))
    return result


def search(
    professionals: Iterable[ProfessionalRead],
    criteria: DirectoryCriteria,
    portfolio_counts: Mapping[UUID, int] | None = None,
) -> list[ProfessionalRead]:
    """
    Run every step over a snapshot of professionals.

    `portfolio_counts` is required when `criteria.has_portfolio` is set;
    a missing id counts as zero items.
    """
    result = narrow(professionals, criteria)
    if criteria.has_portfolio:
        result = filter_has_portfolio(result, portfolio_counts or {})
    return order(result, criteria.sort_by)


def active_filter_count(criteria: DirectoryCriteria) -> int:
    """Number of non-default criteria. Both price bounds together count once."""
    count = 0
    if criteria.min_price is not None or criteria.max_price is not None:
        count += 1
    if criteria.min_experience is not None:
        count += 1
    if criteria.has_portfolio:
        count += 1
    if criteria.sort_by != SortOrder.NEWEST:
        count += 1
    return count
