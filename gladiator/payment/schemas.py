"""
gladiator/payment/schemas.py

Payment Schemas
- PaymentIntentWrite: client-declared USDT TRC20 payment
- TransactionRead: stored payment intent
- PaymentInstructions: wallet details and QR data shown before paying
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gladiator.database.enums import TransactionStatus


class PaymentIntentWrite(BaseModel):
    amount: Decimal | None = Field(default=None, description="Amount in USDT, must be positive")
    recipient_wallet: str | None = Field(
        default=None, description="Wallet the client paid to; must match the professional's"
    )
    tx_hash: str | None = Field(
        default=None, max_length=128, description="On-chain transaction hash (not verified)"
    )
    description: str | None = Field(default=None, description="What the payment is for")


class TransactionRead(BaseModel):
    id: UUID
    client_id: UUID
    professional_id: UUID
    amount: Decimal
    currency: str
    network: str
    recipient_wallet: str
    tx_hash: str | None = None
    description: str | None = None
    status: TransactionStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentInstructions(BaseModel):
    professional_id: UUID
    wallet: str = Field(..., description="Professional's TRC20 wallet address")
    currency: str
    network: str
    payment_uri: str = Field(..., description="tron:<wallet> URI encoded in the QR code")
    qr_code_url: str = Field(..., description="Image URL rendering the payment URI as a QR code")
