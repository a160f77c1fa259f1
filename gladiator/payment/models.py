"""
payment/models.py

Transaction model: a client-declared, unverified crypto payment intent.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import CheckConstraint

from gladiator.database.base import Base, enum_values, utcnow
from gladiator.database.enums import TransactionStatus

PAYMENT_CURRENCY = "USDT"
PAYMENT_NETWORK = "TRC20"
AMOUNT_PRECISION = 18
AMOUNT_SCALE = 6


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (CheckConstraint("amount > 0", name="amount_positive"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE", name="fk_transactions_client_id"),
        nullable=False,
        index=True,
    )
    professional_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE", name="fk_transactions_professional_id"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False
    )
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default=PAYMENT_CURRENCY)
    network: Mapped[str] = mapped_column(String(10), nullable=False, default=PAYMENT_NETWORK)
    recipient_wallet: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Copied from the professional at creation time"
    )
    tx_hash: Mapped[str | None] = mapped_column(
        String(128), nullable=True, comment="Unverified on-chain transaction hash"
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[TransactionStatus] = mapped_column(
        Enum(TransactionStatus, name="transaction_status", values_callable=enum_values),
        nullable=False,
        default=TransactionStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
