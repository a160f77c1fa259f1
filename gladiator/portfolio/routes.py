"""
gladiator/portfolio/routes.py

Portfolio Routes
- Public listing of a professional's portfolio
- Multipart creation with optional image
- Owner-only deletion
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from gladiator.core.dependencies import CurrentUserDep, StoreDep
from gladiator.core.limiter import limiter
from gladiator.core.schemas import MessageResponse
from gladiator.core.storage import BlobStorage, get_blob_storage
from gladiator.portfolio.schemas import PortfolioItemRead, PortfolioItemWrite
from gladiator.portfolio.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["Portfolio"])
logger = logging.getLogger(__name__)

StorageDep = Annotated[BlobStorage, Depends(get_blob_storage)]


@router.get(
    "/{professional_id}",
    response_model=list[PortfolioItemRead],
    status_code=status.HTTP_200_OK,
    summary="List Portfolio Items",
)
@limiter.limit("60/minute")
async def list_portfolio_items(
    request: Request,
    professional_id: UUID,
    store: StoreDep,
) -> list[PortfolioItemRead]:
    return await PortfolioService(store).list_items(professional_id)


@router.post(
    "",
    response_model=PortfolioItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Portfolio Item",
    description="Create a portfolio item. Tags are comma-separated; the image is optional (max 5MB).",
)
@limiter.limit("10/minute")
async def create_portfolio_item(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
    storage: StorageDep,
    title: Annotated[str, Form(max_length=200)],
    description: Annotated[str | None, Form()] = None,
    project_url: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form()] = None,
    image: UploadFile | None = File(default=None, description="Optional project image"),
) -> PortfolioItemRead:
    data = PortfolioItemWrite(
        title=title, description=description, project_url=project_url, tags=tags
    )
    image_bytes = await image.read() if image else None
    return await PortfolioService(store).create_item(current_user, data, image_bytes, storage)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete Portfolio Item",
)
@limiter.limit("10/minute")
async def delete_portfolio_item(
    request: Request,
    item_id: UUID,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    await PortfolioService(store).delete_item(item_id, current_user)
    return MessageResponse(detail="Portfolio item deleted")
