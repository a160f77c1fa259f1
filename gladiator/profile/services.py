"""
gladiator/profile/services.py

Profile Service Layer
- Register the caller's profile (professional or client)
- Read profiles by id
- Role-aware partial updates
- Avatar upload to blob storage
"""

import logging
from typing import Any
from uuid import UUID

from gladiator.core.config import settings
from gladiator.core.exceptions import ConflictError, ConstraintViolation, NotFoundError, ValidationError
from gladiator.core.schemas import CurrentUser, Identity
from gladiator.core.storage import BlobStorage, inspect_image
from gladiator.core.validators import optional_text
from gladiator.database.enums import UserRole
from gladiator.database.models import PROFILES
from gladiator.database.store import DataStore
from gladiator.profile.schemas import (
    CLIENT_FIELDS,
    PROFESSIONAL_FIELDS,
    ProfileRead,
    ProfileRegister,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)


def _clean_values(role: UserRole, data: ProfileUpdate) -> dict[str, Any]:
    """
    Keep only explicitly sent fields, trim text and enforce role-specific fields.

    Raises:
        ValidationError: If a field belonging to the other role is supplied.
    """
    values = data.model_dump(exclude_unset=True, exclude={"user_type"})
    forbidden = CLIENT_FIELDS if role == UserRole.PROFESSIONAL else PROFESSIONAL_FIELDS
    rejected = sorted(forbidden & values.keys())
    if rejected:
        raise ValidationError(
            f"Fields not allowed for a {role.value} profile: {', '.join(rejected)}",
            code="field_not_allowed",
        )

    for key, value in values.items():
        if isinstance(value, str):
            values[key] = optional_text(value)
    if "skills" in values and values["skills"] is None:
        values["skills"] = []
    if "accepts_crypto" in values and values["accepts_crypto"] is None:
        values["accepts_crypto"] = False
    return values


class ProfileService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def register(self, identity: Identity, data: ProfileRegister) -> ProfileRead:
        """
        Create the caller's profile. The profile id is the identity id.

        Raises:
            ConflictError: If the identity already has a profile.
        """
        values = _clean_values(data.user_type, data)
        values.setdefault("email", identity.email)
        try:
            row = await self.store.insert(
                PROFILES, {**values, "id": identity.id, "user_type": data.user_type}
            )
        except ConstraintViolation as e:
            logger.warning(f"[PROFILE] Duplicate registration for {identity.id}")
            raise ConflictError("Profile already exists", code="profile_exists") from e

        logger.info(f"[PROFILE] Registered {data.user_type.value} profile {identity.id}")
        return ProfileRead.model_validate(row)

    async def get_profile(self, profile_id: UUID) -> ProfileRead:
        row = await self.store.fetch_one(PROFILES, {"id": profile_id})
        if not row:
            raise NotFoundError("Profile not found")
        return ProfileRead.model_validate(row)

    async def update_profile(self, actor: CurrentUser, data: ProfileUpdate) -> ProfileRead:
        """Apply a partial update to the actor's own profile."""
        values = _clean_values(actor.role, data)
        if not values:
            return await self.get_profile(actor.id)

        row = await self.store.update(PROFILES, {"id": actor.id}, values)
        if not row:
            raise NotFoundError("Profile not found")
        logger.info(f"[PROFILE] Updated {sorted(values)} for {actor.id}")
        return ProfileRead.model_validate(row)

    async def update_avatar(
        self, actor: CurrentUser, data: bytes, storage: BlobStorage
    ) -> ProfileRead:
        """Validate and upload a new avatar, then store its public URL."""
        image = inspect_image(data)
        url = await storage.upload(
            settings.AVATAR_BUCKET, f"{actor.id}/avatar.{image.extension}", data, image.mime
        )
        row = await self.store.update(PROFILES, {"id": actor.id}, {"avatar_url": url})
        if not row:
            raise NotFoundError("Profile not found")
        logger.info(f"[PROFILE] Avatar updated for {actor.id}")
        return ProfileRead.model_validate(row)
