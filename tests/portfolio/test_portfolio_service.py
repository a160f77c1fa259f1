"""
tests/portfolio/test_portfolio_service.py

Portfolio items: creation rules, image upload, ownership and batched counts.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from httpx import AsyncClient

from gladiator.core.exceptions import EmptyField, InvalidFile, NotAProfessional, NotFoundError, NotOwner
from gladiator.database.enums import UserRole
from gladiator.database.models import PORTFOLIO_ITEMS
from gladiator.portfolio.schemas import PortfolioItemWrite
from gladiator.portfolio.services import PortfolioService


def test_tags_accept_comma_separated_string():
    data = PortfolioItemWrite(title="Site", tags=" react, , node ,")
    assert data.tags == ["react", "node"]


@pytest.mark.asyncio
async def test_create_item_normalises_fields(store, fake_professional):
    item = await PortfolioService(store).create_item(
        fake_professional,
        PortfolioItemWrite(title="  Landing page ", description="  ", tags=["ui", " "]),
    )

    assert item.title == "Landing page"
    assert item.description is None
    assert item.tags == ["ui"]
    assert item.image_url is None


@pytest.mark.asyncio
async def test_create_item_uploads_image(store, fake_professional, blob_storage, png_bytes):
    item = await PortfolioService(store).create_item(
        fake_professional, PortfolioItemWrite(title="Logo"), png_bytes, blob_storage
    )

    upload = blob_storage.uploads[0]
    assert upload["bucket"] == "portfolio"
    assert upload["path"].startswith(f"{fake_professional.id}/")
    assert upload["path"].endswith(".png")
    assert upload["content_type"] == "image/png"
    assert item.image_url == f"https://storage.test/portfolio/{upload['path']}"


@pytest.mark.asyncio
async def test_create_item_rejects_non_image(store, fake_professional, blob_storage):
    with pytest.raises(InvalidFile):
        await PortfolioService(store).create_item(
            fake_professional, PortfolioItemWrite(title="Notes"), b"plain text", blob_storage
        )
    assert blob_storage.uploads == []
    assert await store.count(PORTFOLIO_ITEMS) == 0


@pytest.mark.asyncio
async def test_create_item_rules(store, fake_professional, fake_client):
    service = PortfolioService(store)

    with pytest.raises(NotAProfessional):
        await service.create_item(fake_client, PortfolioItemWrite(title="Mine"))
    with pytest.raises(EmptyField):
        await service.create_item(fake_professional, PortfolioItemWrite(title="   "))


@pytest.mark.asyncio
async def test_list_items_newest_first(store, fake_professional):
    for month in (1, 3, 2):
        await store.insert(
            PORTFOLIO_ITEMS,
            {
                "user_id": fake_professional.id,
                "title": f"item-{month}",
                "created_at": datetime(2024, month, 1, tzinfo=timezone.utc),
            },
        )

    items = await PortfolioService(store).list_items(fake_professional.id)
    assert [i.title for i in items] == ["item-3", "item-2", "item-1"]


@pytest.mark.asyncio
async def test_delete_item_owner_only(store, fake_professional, make_profile):
    service = PortfolioService(store)
    item = await service.create_item(fake_professional, PortfolioItemWrite(title="Keep"))
    other = await make_profile(UserRole.PROFESSIONAL)

    with pytest.raises(NotOwner):
        await service.delete_item(item.id, other)
    with pytest.raises(NotFoundError):
        await service.delete_item(uuid4(), fake_professional)

    await service.delete_item(item.id, fake_professional)
    assert await store.count(PORTFOLIO_ITEMS) == 0


@pytest.mark.asyncio
async def test_count_for(store, fake_professional):
    service = PortfolioService(store)
    await service.create_item(fake_professional, PortfolioItemWrite(title="a"))
    await service.create_item(fake_professional, PortfolioItemWrite(title="b"))
    nobody = uuid4()

    assert await service.count_for([fake_professional.id, nobody]) == {
        fake_professional.id: 2,
        nobody: 0,
    }
    assert await service.count_for([]) == {}


# --- Routes ---


@pytest.mark.asyncio
async def test_multipart_create_and_list(
    async_client: AsyncClient, login_as, fake_professional, blob_storage, png_bytes
):
    login_as(fake_professional)
    response = await async_client.post(
        "/portfolio",
        data={"title": "Brand kit", "tags": "branding, print"},
        files={"image": ("kit.png", png_bytes, "image/png")},
    )

    assert response.status_code == 201
    assert response.json()["tags"] == ["branding", "print"]
    assert len(blob_storage.uploads) == 1

    listed = await async_client.get(f"/portfolio/{fake_professional.id}")
    assert [i["title"] for i in listed.json()] == ["Brand kit"]
