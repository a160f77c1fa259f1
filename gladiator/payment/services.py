"""
gladiator/payment/services.py

Payment Service Layer

Records client-declared crypto payment intents (USDT on TRC20). Nothing here
talks to a blockchain: the wallet format is not checked and a supplied
transaction hash is stored as an unverified claim.
"""

import logging
from decimal import Decimal
from typing import Any
from urllib.parse import quote
from uuid import UUID

from gladiator.core.exceptions import (
    CryptoNotAccepted,
    InvalidAmount,
    NotAClient,
    NotFoundError,
    ValidationError,
)
from gladiator.core.schemas import CurrentUser
from gladiator.core.validators import optional_text
from gladiator.database.enums import TransactionStatus, UserRole
from gladiator.database.models import PROFILES, TRANSACTIONS
from gladiator.database.store import DataStore
from gladiator.payment.models import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    PAYMENT_CURRENCY,
    PAYMENT_NETWORK,
)
from gladiator.payment.schemas import PaymentInstructions, TransactionRead

logger = logging.getLogger(__name__)

QR_CODE_ENDPOINT = "https://api.qrserver.com/v1/create-qr-code/"

# Largest value and finest step the transactions.amount column can hold.
MAX_AMOUNT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)
AMOUNT_STEP = Decimal(1).scaleb(-AMOUNT_SCALE)


def payment_uri(wallet: str) -> str:
    return f"tron:{wallet}"


def qr_code_url(data: str, size: int = 300) -> str:
    return f"{QR_CODE_ENDPOINT}?size={size}x{size}&data={quote(data, safe='')}"


def validate_amount(amount: Decimal | None) -> Decimal:
    """
    Raises:
        InvalidAmount: Unless the amount is positive and fits the stored precision.
    """
    if amount is None or amount <= 0:
        raise InvalidAmount()
    if amount >= MAX_AMOUNT:
        raise InvalidAmount(f"Amount must be less than {MAX_AMOUNT:,}")
    if amount != amount.quantize(AMOUNT_STEP):
        raise InvalidAmount(f"Amount supports at most {AMOUNT_SCALE} decimal places")
    return amount


class PaymentService:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def _get_payable_professional(self, professional_id: UUID) -> tuple[dict[str, Any], str]:
        """
        Return the professional and their published wallet.

        Raises:
            NotFoundError: If the professional does not exist.
            CryptoNotAccepted: Unless crypto is enabled and a wallet is published.
        """
        professional = await self.store.fetch_one(PROFILES, {"id": professional_id})
        if not professional or professional["user_type"] != UserRole.PROFESSIONAL:
            raise NotFoundError("Professional not found")

        wallet = optional_text(professional.get("crypto_wallet_trc20"))
        if not professional.get("accepts_crypto") or wallet is None:
            raise CryptoNotAccepted()
        return professional, wallet

    async def payment_instructions(self, professional_id: UUID) -> PaymentInstructions:
        _, wallet = await self._get_payable_professional(professional_id)
        uri = payment_uri(wallet)
        return PaymentInstructions(
            professional_id=professional_id,
            wallet=wallet,
            currency=PAYMENT_CURRENCY,
            network=PAYMENT_NETWORK,
            payment_uri=uri,
            qr_code_url=qr_code_url(uri),
        )

    async def create_payment_intent(
        self,
        actor: CurrentUser,
        professional_id: UUID,
        amount: Decimal | None,
        recipient_wallet: str | None = None,
        tx_hash: str | None = None,
        description: str | None = None,
    ) -> TransactionRead:
        """
        Record a payment intent from a client to a professional.

        Raises:
            InvalidAmount: If the amount is not positive or does not fit the amount column.
            NotAClient: If the actor is not a client.
            NotFoundError: If the professional does not exist.
            CryptoNotAccepted: If the professional cannot receive crypto.
            ValidationError: If a supplied wallet differs from the professional's.
        """
        amount = validate_amount(amount)
        if actor.role != UserRole.CLIENT:
            raise NotAClient("Only clients can record payments")

        _, wallet = await self._get_payable_professional(professional_id)
        claimed_wallet = optional_text(recipient_wallet)
        if claimed_wallet is not None and claimed_wallet != wallet:
            raise ValidationError(
                "Recipient wallet does not match the professional's wallet", code="wallet_mismatch"
            )

        tx_hash = optional_text(tx_hash)
        status = TransactionStatus.CONFIRMING if tx_hash else TransactionStatus.PENDING
        row = await self.store.insert(
            TRANSACTIONS,
            {
                "client_id": actor.id,
                "professional_id": professional_id,
                "amount": amount,
                "currency": PAYMENT_CURRENCY,
                "network": PAYMENT_NETWORK,
                "recipient_wallet": wallet,
                "tx_hash": tx_hash,
                "description": optional_text(description),
                "status": status,
            },
        )
        logger.info(
            f"[PAYMENT] {actor.id} -> {professional_id}: {amount} {PAYMENT_CURRENCY} ({status.value})"
        )
        return TransactionRead.model_validate(row)

    async def list_transactions(self, actor: CurrentUser) -> list[TransactionRead]:
        """Payment intents the actor sent or received, newest first."""
        sent = await self.store.fetch_all(TRANSACTIONS, {"client_id": actor.id})
        received = await self.store.fetch_all(TRANSACTIONS, {"professional_id": actor.id})
        rows = sorted(sent + received, key=lambda row: row["created_at"], reverse=True)
        return [TransactionRead.model_validate(row) for row in rows]
