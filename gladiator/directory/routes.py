"""
gladiator/directory/routes.py

Directory Routes
- Search professionals by category, text, price, experience and portfolio
- List the fixed professional categories
"""

from decimal import Decimal
from typing import Annotated, Literal

from fastapi import APIRouter, Query, Request, status

from gladiator.core.dependencies import StoreDep
from gladiator.core.limiter import limiter
from gladiator.database.enums import CATEGORY_LABELS, Category, SortOrder
from gladiator.directory.schemas import CategoryRead, DirectoryCriteria, DirectoryResult
from gladiator.directory.services import DirectoryService

router = APIRouter(prefix="/professionals", tags=["Directory"])


@router.get(
    "",
    response_model=DirectoryResult,
    status_code=status.HTTP_200_OK,
    summary="Search Professionals",
    description="Filter and sort the professional directory. `seq` is echoed back unchanged.",
)
@limiter.limit("60/minute")
async def search_professionals(
    request: Request,
    store: StoreDep,
    category: Annotated[Category | Literal["all"], Query()] = "all",
    search: Annotated[str, Query(max_length=200)] = "",
    min_price: Annotated[Decimal | None, Query(ge=0)] = None,
    max_price: Annotated[Decimal | None, Query(ge=0)] = None,
    min_experience: Annotated[int | None, Query(ge=0)] = None,
    has_portfolio: bool = False,
    sort_by: SortOrder = SortOrder.NEWEST,
    seq: int | None = None,
) -> DirectoryResult:
    criteria = DirectoryCriteria(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        min_experience=min_experience,
        has_portfolio=has_portfolio,
        sort_by=sort_by,
    )
    return await DirectoryService(store).search(criteria, seq=seq)


@router.get(
    "/categories",
    response_model=list[CategoryRead],
    status_code=status.HTTP_200_OK,
    summary="List Categories",
)
async def list_categories() -> list[CategoryRead]:
    return [CategoryRead(value=category, label=label) for category, label in CATEGORY_LABELS.items()]
