"""
tests/review/test_review_routes.py

Review endpoints and the tagged error envelope.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_submit_review_requires_authentication(async_client: AsyncClient, fake_professional):
    response = await async_client.post(f"/reviews/{fake_professional.id}", json={"rating": 5})

    assert response.status_code == 401
    assert response.json() == {
        "error": {
            "kind": "authorization",
            "code": "not_authenticated",
            "message": "Could not validate credentials",
        }
    }


@pytest.mark.asyncio
async def test_duplicate_review_returns_conflict(
    async_client: AsyncClient, login_as, fake_professional, fake_client
):
    login_as(fake_client)
    first = await async_client.post(
        f"/reviews/{fake_professional.id}", json={"rating": 5, "comment": "Excellent"}
    )
    second = await async_client.post(f"/reviews/{fake_professional.id}", json={"rating": 3})

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "already_reviewed"

    summary = await async_client.get(f"/reviews/summary/{fake_professional.id}")
    assert summary.json() == {"average_rating": "5.00", "review_count": 1, "label": "5.00 (1 review)"}


@pytest.mark.asyncio
async def test_professional_cannot_review(async_client: AsyncClient, login_as, fake_professional):
    login_as(fake_professional)
    response = await async_client.post(f"/reviews/{fake_professional.id}", json={"rating": 5})

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "not_a_client"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"rating": 0}, {"rating": 7}, {"comment": "No stars"}])
async def test_bad_rating_returns_invalid_rating(
    async_client: AsyncClient, login_as, fake_professional, fake_client, payload
):
    login_as(fake_client)
    response = await async_client.post(f"/reviews/{fake_professional.id}", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == {
        "kind": "validation",
        "code": "invalid_rating",
        "message": "Rating must be an integer between 1 and 5",
    }


@pytest.mark.asyncio
async def test_edit_with_bad_rating_keeps_review(
    async_client: AsyncClient, login_as, fake_professional, fake_client
):
    login_as(fake_client)
    created = (
        await async_client.post(f"/reviews/{fake_professional.id}", json={"rating": 4})
    ).json()

    response = await async_client.patch(f"/reviews/{created['id']}", json={"rating": 6})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_rating"
    listed = await async_client.get(f"/reviews/professional/{fake_professional.id}")
    assert listed.json()[0]["rating"] == 4


@pytest.mark.asyncio
async def test_zero_review_summary(async_client: AsyncClient):
    response = await async_client.get(f"/reviews/summary/{uuid4()}")

    assert response.status_code == 200
    assert response.json() == {"average_rating": None, "review_count": 0, "label": None}


@pytest.mark.asyncio
async def test_list_and_delete_review(async_client: AsyncClient, login_as, fake_professional, fake_client):
    login_as(fake_client)
    created = (
        await async_client.post(f"/reviews/{fake_professional.id}", json={"rating": 4})
    ).json()

    listed = await async_client.get(f"/reviews/professional/{fake_professional.id}")
    assert [r["id"] for r in listed.json()] == [created["id"]]
    assert listed.json()[0]["client"]["full_name"] == "Cleo Client"

    deleted = await async_client.delete(f"/reviews/{created['id']}")
    assert deleted.status_code == 200
    assert (await async_client.get(f"/reviews/professional/{fake_professional.id}")).json() == []
