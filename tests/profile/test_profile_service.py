"""
tests/profile/test_profile_service.py

Profile registration, role-aware updates and avatar upload.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

from gladiator.core.config import settings
from gladiator.core.exceptions import ConflictError, InvalidFile, NotFoundError, ValidationError
from gladiator.core.schemas import Identity
from gladiator.database.enums import Category, UserRole
from gladiator.profile.schemas import ProfileRegister, ProfileUpdate
from gladiator.profile.services import ProfileService


@pytest.mark.asyncio
async def test_register_professional(store):
    identity = Identity(id=uuid4(), email="pro@example.com")
    profile = await ProfileService(store).register(
        identity,
        ProfileRegister(
            user_type=UserRole.PROFESSIONAL,
            full_name=" Ana ",
            category=Category.DESIGN,
            skills="figma, branding",
        ),
    )

    assert profile.id == identity.id
    assert profile.email == "pro@example.com"
    assert profile.full_name == "Ana"
    assert profile.skills == ["figma", "branding"]
    assert profile.accepts_crypto is False


@pytest.mark.asyncio
async def test_register_twice_conflicts(store):
    identity = Identity(id=uuid4())
    service = ProfileService(store)
    await service.register(identity, ProfileRegister(user_type=UserRole.CLIENT))

    with pytest.raises(ConflictError) as exc_info:
        await service.register(identity, ProfileRegister(user_type=UserRole.CLIENT))
    assert exc_info.value.code == "profile_exists"


@pytest.mark.asyncio
async def test_register_rejects_other_role_fields(store):
    with pytest.raises(ValidationError):
        await ProfileService(store).register(
            Identity(id=uuid4()),
            ProfileRegister(user_type=UserRole.CLIENT, hourly_rate=Decimal("30")),
        )


@pytest.mark.asyncio
async def test_get_profile_not_found(store):
    with pytest.raises(NotFoundError):
        await ProfileService(store).get_profile(uuid4())


@pytest.mark.asyncio
async def test_professional_update(store, fake_professional):
    profile = await ProfileService(store).update_profile(
        fake_professional,
        ProfileUpdate(hourly_rate=Decimal("55.00"), skills=["Go", " "], bio="  "),
    )

    assert profile.hourly_rate == Decimal("55.00")
    assert profile.skills == ["Go"]
    assert profile.bio is None
    assert profile.full_name == "Ana Designer"


@pytest.mark.asyncio
async def test_professional_cannot_set_client_fields(store, fake_professional):
    with pytest.raises(ValidationError) as exc_info:
        await ProfileService(store).update_profile(fake_professional, ProfileUpdate(company_name="Acme"))
    assert "company_name" in exc_info.value.message


@pytest.mark.asyncio
async def test_client_cannot_set_professional_fields(store, fake_client):
    with pytest.raises(ValidationError):
        await ProfileService(store).update_profile(fake_client, ProfileUpdate(accepts_crypto=True))


@pytest.mark.asyncio
async def test_update_avatar(store, fake_client, blob_storage, png_bytes):
    profile = await ProfileService(store).update_avatar(fake_client, png_bytes, blob_storage)

    assert blob_storage.uploads[0]["path"] == f"{fake_client.id}/avatar.png"
    assert profile.avatar_url == f"https://storage.test/avatars/{fake_client.id}/avatar.png"


@pytest.mark.asyncio
async def test_update_avatar_rejects_oversized(store, fake_client, blob_storage, png_bytes, monkeypatch):
    monkeypatch.setattr(settings, "MAX_IMAGE_SIZE", 10)
    with pytest.raises(InvalidFile):
        await ProfileService(store).update_avatar(fake_client, png_bytes, blob_storage)
    assert blob_storage.uploads == []


# --- Routes ---


@pytest.mark.asyncio
async def test_register_and_read_me(async_client: AsyncClient, login_as):
    identity = Identity(id=uuid4(), email="new@example.com")
    login_as(identity)

    created = await async_client.post("/profiles", json={"user_type": "client", "company_name": "Beta"})
    assert created.status_code == 201

    me = await async_client.get("/profiles/me")
    assert me.status_code == 200
    assert me.json()["company_name"] == "Beta"
    assert me.json()["user_type"] == "client"


@pytest.mark.asyncio
async def test_me_without_profile_is_forbidden(async_client: AsyncClient, login_as):
    login_as(Identity(id=uuid4()))

    response = await async_client.get("/profiles/me")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "no_profile"


@pytest.mark.asyncio
async def test_public_profile(async_client: AsyncClient, fake_professional):
    response = await async_client.get(f"/profiles/{fake_professional.id}")

    assert response.status_code == 200
    assert response.json()["full_name"] == "Ana Designer"
    assert (await async_client.get(f"/profiles/{uuid4()}")).json()["error"]["kind"] == "not_found"
