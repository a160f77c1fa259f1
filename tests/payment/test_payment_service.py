"""
tests/payment/test_payment_service.py

Crypto payment intents and payment instructions.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

from gladiator.core.exceptions import (
    CryptoNotAccepted,
    InvalidAmount,
    NotAClient,
    NotFoundError,
    ValidationError,
)
from gladiator.database.enums import TransactionStatus, UserRole
from gladiator.database.models import TRANSACTIONS
from gladiator.payment.services import PaymentService


@pytest.mark.asyncio
async def test_pending_intent_copies_professional_wallet(store, fake_professional, fake_client):
    tx = await PaymentService(store).create_payment_intent(
        fake_client, fake_professional.id, Decimal("25.5"), description="Logo design"
    )

    assert tx.status == TransactionStatus.PENDING
    assert tx.recipient_wallet == "TXYZwallet123"
    assert (tx.currency, tx.network) == ("USDT", "TRC20")
    assert tx.tx_hash is None


@pytest.mark.asyncio
async def test_tx_hash_marks_intent_confirming(store, fake_professional, fake_client):
    tx = await PaymentService(store).create_payment_intent(
        fake_client, fake_professional.id, Decimal("10"), tx_hash=" abc123 "
    )

    assert tx.status == TransactionStatus.CONFIRMING
    assert tx.tx_hash == "abc123"


@pytest.mark.asyncio
async def test_blank_tx_hash_stays_pending(store, fake_professional, fake_client):
    tx = await PaymentService(store).create_payment_intent(
        fake_client, fake_professional.id, Decimal("10"), tx_hash="   "
    )
    assert tx.status == TransactionStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "amount",
    [None, Decimal("0"), Decimal("-5"), Decimal("1000000000000"), Decimal("0.0000001")],
)
async def test_invalid_amount(store, fake_professional, fake_client, amount):
    with pytest.raises(InvalidAmount):
        await PaymentService(store).create_payment_intent(fake_client, fake_professional.id, amount)
    assert await store.count(TRANSACTIONS) == 0


@pytest.mark.asyncio
async def test_only_clients_can_pay(store, fake_professional):
    with pytest.raises(NotAClient):
        await PaymentService(store).create_payment_intent(
            fake_professional, fake_professional.id, Decimal("10")
        )


@pytest.mark.asyncio
async def test_unknown_professional(store, fake_client):
    with pytest.raises(NotFoundError):
        await PaymentService(store).create_payment_intent(fake_client, uuid4(), Decimal("10"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {"accepts_crypto": False, "crypto_wallet_trc20": "TXYZ"},
        {"accepts_crypto": True, "crypto_wallet_trc20": None},
        {"accepts_crypto": True, "crypto_wallet_trc20": "   "},
    ],
)
async def test_crypto_not_accepted(store, fake_client, make_profile, fields):
    professional = await make_profile(UserRole.PROFESSIONAL, **fields)

    with pytest.raises(CryptoNotAccepted):
        await PaymentService(store).create_payment_intent(fake_client, professional.id, Decimal("10"))


@pytest.mark.asyncio
async def test_wallet_mismatch(store, fake_professional, fake_client):
    with pytest.raises(ValidationError) as exc_info:
        await PaymentService(store).create_payment_intent(
            fake_client, fake_professional.id, Decimal("10"), recipient_wallet="TOTHER"
        )
    assert exc_info.value.code == "wallet_mismatch"


@pytest.mark.asyncio
async def test_payment_instructions(store, fake_professional):
    info = await PaymentService(store).payment_instructions(fake_professional.id)

    assert info.wallet == "TXYZwallet123"
    assert info.payment_uri == "tron:TXYZwallet123"
    assert info.qr_code_url == (
        "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data=tron%3ATXYZwallet123"
    )


@pytest.mark.asyncio
async def test_list_transactions_for_both_parties(store, fake_professional, fake_client):
    service = PaymentService(store)
    first = await service.create_payment_intent(fake_client, fake_professional.id, Decimal("1"))
    second = await service.create_payment_intent(fake_client, fake_professional.id, Decimal("2"))

    sent = await service.list_transactions(fake_client)
    received = await service.list_transactions(fake_professional)

    assert {t.id for t in sent} == {first.id, second.id}
    assert [t.id for t in received] == [t.id for t in sent]
    assert sent[0].created_at >= sent[1].created_at


# --- Routes ---


@pytest.mark.asyncio
async def test_payment_route_error_envelope(
    async_client: AsyncClient, login_as, fake_professional, fake_client
):
    login_as(fake_client)
    response = await async_client.post(f"/payments/{fake_professional.id}", json={"amount": "0"})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "kind": "validation",
        "code": "invalid_amount",
        "message": "Amount must be greater than zero",
    }


@pytest.mark.asyncio
async def test_payment_route_records_intent(
    async_client: AsyncClient, login_as, fake_professional, fake_client
):
    login_as(fake_client)
    response = await async_client.post(
        f"/payments/{fake_professional.id}", json={"amount": "12.5", "tx_hash": "0xhash"}
    )

    assert response.status_code == 201
    assert response.json()["status"] == "confirming"
    mine = await async_client.get("/payments/my")
    assert len(mine.json()) == 1


@pytest.mark.asyncio
async def test_largest_storable_amount_is_accepted(store, fake_professional, fake_client):
    tx = await PaymentService(store).create_payment_intent(
        fake_client, fake_professional.id, Decimal("999999999999.999999")
    )

    assert tx.amount == Decimal("999999999999.999999")


@pytest.mark.asyncio
async def test_payment_route_rejects_oversized_amount(
    async_client: AsyncClient, login_as, fake_professional, fake_client
):
    login_as(fake_client)
    response = await async_client.post(
        f"/payments/{fake_professional.id}", json={"amount": "10000000000000"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_amount"
    assert (await async_client.get("/payments/my")).json() == []
