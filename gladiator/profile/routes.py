"""
gladiator/profile/routes.py

Profile Routes
Defines API routes for:
- Registering the caller's profile after hosted sign-up
- Reading and updating the authenticated user's profile
- Avatar upload
- Public profile lookup
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from gladiator.core.dependencies import CurrentUserDep, IdentityDep, StoreDep
from gladiator.core.limiter import limiter
from gladiator.core.storage import BlobStorage, get_blob_storage
from gladiator.profile.schemas import ProfileRead, ProfileRegister, ProfileUpdate
from gladiator.profile.services import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])
logger = logging.getLogger(__name__)

StorageDep = Annotated[BlobStorage, Depends(get_blob_storage)]


# ---------------------------------------------------
# Registration
# ---------------------------------------------------
@router.post(
    "",
    response_model=ProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Profile",
    description="Create the profile for the authenticated identity as a professional or client.",
)
@limiter.limit("5/minute")
async def register_profile(
    request: Request,
    data: ProfileRegister,
    store: StoreDep,
    identity: IdentityDep,
) -> ProfileRead:
    return await ProfileService(store).register(identity, data)


# ---------------------------------------------------
# Authenticated Profile Endpoints
# ---------------------------------------------------
@router.get(
    "/me",
    response_model=ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Profile",
)
@limiter.limit("30/minute")
async def get_my_profile(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> ProfileRead:
    return await ProfileService(store).get_profile(current_user.id)


@router.patch(
    "/me",
    response_model=ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Update My Profile",
    description="Update fields of the authenticated user's profile. Fields of the other role are rejected.",
)
@limiter.limit("10/minute")
async def update_my_profile(
    request: Request,
    data: ProfileUpdate,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> ProfileRead:
    return await ProfileService(store).update_profile(current_user, data)


@router.put(
    "/me/avatar",
    response_model=ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Upload My Avatar",
    description="Upload a JPEG, PNG, GIF or WEBP avatar (max 5MB).",
)
@limiter.limit("5/hour")
async def upload_my_avatar(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
    storage: StorageDep,
    avatar: UploadFile = File(..., description="Avatar image file"),
) -> ProfileRead:
    logger.info(f"User {current_user.id} uploading a new avatar.")
    data = await avatar.read()
    return await ProfileService(store).update_avatar(current_user, data, storage)


# ---------------------------------------------------
# Public Profile Endpoint
# ---------------------------------------------------
@router.get(
    "/{profile_id}",
    response_model=ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Get Profile",
)
@limiter.limit("60/minute")
async def get_profile(
    request: Request,
    profile_id: UUID,
    store: StoreDep,
) -> ProfileRead:
    return await ProfileService(store).get_profile(profile_id)
